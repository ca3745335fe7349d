"""
Link extraction: the web adjacency provider.

Fetches a page, collects every ``<a href>`` and resolves it against the
final (post-redirect) URL. Failures never escape ``adjacent_nodes``; they
are logged and the page contributes no links.
"""
from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

import requests
from bs4 import BeautifulSoup, SoupStrainer

from linkcrawler.log import log

# SoupStrainer to parse only <a> tags (faster link extraction)
LINK_STRAINER = SoupStrainer("a", href=True)

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class GetLinksError(Exception):
    """Fetching or reading a page failed."""

    kind = "error"

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url


class SendRequestError(GetLinksError):
    kind = "connection_error"

    def __init__(self, url: str) -> None:
        super().__init__(url, "Failed to send a request")


class ServerError(GetLinksError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(url, f"Server returned an error ({status_code})")
        self.status_code = status_code

    @property
    def kind(self) -> str:  # type: ignore[override]
        return str(self.status_code)


class ResponseBodyError(GetLinksError):
    kind = "body_error"

    def __init__(self, url: str) -> None:
        super().__init__(url, "Failed to read the response body")


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected during crawl for summary output."""
    pages_crawled: int = 0
    links_found: int = 0
    error_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def record_error(self, error: GetLinksError) -> None:
        """Record a failed page by error kind."""
        self.error_counts[error.kind] += 1

    def record_links(self, count: int) -> None:
        self.links_found += count


def normalize_url(url: str, base: Optional[str] = None) -> Optional[str]:
    """
    Normalize a URL into a crawl node.

    - Joins relative URLs against base
    - Drops fragments (#...)
    - Normalizes scheme/host case
    - Removes default ports (:80, :443)
    - Keeps querystrings (they matter for uniqueness)

    Returns None for empty input and non-http(s) schemes. Raises
    ValueError when the URL cannot be parsed (e.g. a bad port or
    an unterminated IPv6 host).
    """
    if not url:
        return None

    joined, _ = urldefrag(urljoin(base, url) if base else url)
    parsed = urlparse(joined)

    if parsed.scheme.lower() not in ("http", "https"):
        return None
    if not parsed.hostname:
        return None

    scheme = parsed.scheme.lower()
    hostname = parsed.hostname.lower()
    if ":" in hostname:
        hostname = f"[{hostname}]"
    port = parsed.port

    if (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
        netloc = hostname
    elif port:
        netloc = f"{hostname}:{port}"
    else:
        netloc = hostname

    return urlunparse((
        scheme,
        netloc,
        parsed.path or "/",
        parsed.params,
        parsed.query,
        ""  # No fragment
    ))


def extract_hrefs(html: str) -> List[str]:
    """Extract all href values from <a> tags, in document order."""
    soup = BeautifulSoup(html, "lxml", parse_only=LINK_STRAINER)
    return [a["href"] for a in soup.find_all("a") if a.get("href")]


def resolve_links(hrefs: List[str], base_url: str) -> List[str]:
    """Resolve hrefs against base_url, dropping the ones that fail."""
    links = []
    for href in hrefs:
        try:
            target = normalize_url(href.strip(), base=base_url)
        except ValueError as e:
            log.warning("URL parse error for %r: %s", href, e)
            continue
        if target is None:
            log.debug("Skipping non-http link %r", href)
            continue
        links.append(target)
    return links


class LinkExtractor:
    """Adjacency provider over web pages: a node's neighbors are its links."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_s: float = 15.0,
        user_agent: Optional[str] = None,
        stats: Optional[CrawlStats] = None,
    ) -> None:
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        self.timeout_s = timeout_s
        self.stats = stats if stats is not None else CrawlStats()

    def get_links(self, url: str) -> List[str]:
        """Fetch url and return the links on the page.

        Raises a GetLinksError subclass when the page cannot be fetched.
        """
        log.info("GET \"%s\"", url)
        try:
            resp = self.session.get(url, timeout=self.timeout_s, allow_redirects=True, stream=True)
        except requests.RequestException as e:
            raise SendRequestError(url) from e

        with resp:
            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise ServerError(url, resp.status_code) from e

            base_url = resp.url or url
            log.info("Retrieved %s \"%s\"", resp.status_code, base_url)

            content_type = (resp.headers.get("content-type") or "").lower()
            if content_type and not any(t in content_type for t in HTML_CONTENT_TYPES):
                log.debug("Not HTML (%s), no links: %s", content_type, base_url)
                return []

            try:
                html = resp.text
            except requests.RequestException as e:
                raise ResponseBodyError(url) from e

        return resolve_links(extract_hrefs(html), base_url)

    def adjacent_nodes(self, url: str) -> List[str]:
        """Links found on url; an empty list if the page could not be read."""
        t0 = time.perf_counter()
        try:
            links = self.get_links(url)
        except GetLinksError as e:
            log.warning("Error occurred: %s", e)
            cause = e.__cause__
            while cause is not None:
                log.warning("Error source: %s", cause)
                cause = cause.__cause__
            self.stats.record_error(e)
            return []
        finally:
            log.info("GetLinks: %d ms", (time.perf_counter() - t0) * 1000)

        log.info("%d links found", len(links))
        self.stats.record_links(len(links))
        return links
