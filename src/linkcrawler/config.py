"""
Crawl configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from linkcrawler import __version__

DEFAULT_USER_AGENT = f"linkcrawler/{__version__}"


@dataclass(slots=True)
class CrawlConfig:
    """Driver policy for a single crawl run."""
    max_pages: Optional[int] = 100
    delay_s: float = 1.0
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if self.max_pages is not None and self.max_pages <= 0:
            raise ValueError(f"max_pages must be positive, got {self.max_pages}")
        if self.delay_s < 0:
            raise ValueError(f"delay_s must not be negative, got {self.delay_s}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
