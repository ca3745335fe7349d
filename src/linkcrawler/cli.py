"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from linkcrawler.config import DEFAULT_USER_AGENT, CrawlConfig
from linkcrawler.core import crawl
from linkcrawler.links import CrawlStats, normalize_url
from linkcrawler.log import setup_logging


def print_summary(stats: CrawlStats) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Total pages crawled:    {stats.pages_crawled}\n")
    sys.stderr.write(f"Links found:            {stats.links_found}\n\n")

    if stats.error_counts:
        sys.stderr.write("Errors by type:\n")
        for error_type, count in sorted(stats.error_counts.items()):
            if error_type == "connection_error":
                label = "Connection errors"
            elif error_type == "body_error":
                label = "Body read errors"
            else:
                label = f"HTTP {error_type}"
            sys.stderr.write(f"  {label}: {count}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkcrawler",
        description="Crawl pages breadth-first from a URL, following every link.",
    )
    parser.add_argument("start_url", help="Start URL (e.g. https://example.com)")
    parser.add_argument("--max-pages", type=int, default=100, help="Maximum pages to visit (default: 100)")
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds to wait between pages (default: 1)")
    parser.add_argument("--timeout", type=float, default=15.0, help="Request timeout in seconds (default: 15)")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--out", help="Write visited URLs as JSON to this path, or '-' for stdout")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging and a summary")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = CrawlConfig(
        max_pages=args.max_pages,
        delay_s=args.delay,
        timeout_s=args.timeout,
        user_agent=args.user_agent,
    )
    try:
        config.validate()
    except ValueError as e:
        parser.error(str(e))

    try:
        start_url = normalize_url(args.start_url)
    except ValueError:
        start_url = None
    if not start_url:
        parser.error(f"invalid start URL: {args.start_url}")

    setup_logging(verbose=args.verbose, log_file=args.log_file)

    def emit(url: str) -> None:
        print(url, flush=True)

    results, stats = crawl(
        start_url=start_url,
        config=config,
        on_page=None if args.out == "-" else emit,
    )

    if args.verbose:
        print_summary(stats)

    if args.out:
        json_text = json.dumps(results, ensure_ascii=False, indent=2 if args.pretty else None)
        if args.out == "-":
            print(json_text)
        else:
            output_path = Path(args.out)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(json_text, encoding="utf-8")
            if args.verbose:
                sys.stderr.write(f"Results written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
