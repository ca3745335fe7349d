"""
Logging configuration for the crawler.
"""
from __future__ import annotations

import logging
from typing import Optional

log = logging.getLogger("linkcrawler")

_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure the package logger.

    Messages go to stderr at INFO (DEBUG when ``verbose``), and are
    optionally mirrored to ``log_file``.
    """
    level = logging.DEBUG if verbose else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FMT, datefmt="%H:%M:%S"))
    log.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(file_handler)
