"""
Core crawling logic: a lazy breadth-first traversal over any adjacency provider.
"""
from __future__ import annotations

import time
from collections import deque
from typing import (
    Callable,
    Deque,
    FrozenSet,
    Generic,
    Hashable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Set,
    Tuple,
    TypeVar,
)

from linkcrawler.config import CrawlConfig
from linkcrawler.links import CrawlStats, LinkExtractor, normalize_url
from linkcrawler.log import log

Node = TypeVar("Node", bound=Hashable)


class AdjacencyProvider(Protocol[Node]):
    """Anything that can list the nodes directly reachable from a node.

    Implementations must not raise: a failure means no neighbors.
    """

    def adjacent_nodes(self, node: Node) -> Sequence[Node]:
        ...


class Crawler(Generic[Node]):
    """
    Breadth-first iterator over the nodes reachable from ``start``.

    Each ``next()`` pops the frontier until it finds an unvisited node,
    asks the provider for its neighbors, queues the unvisited ones and
    returns the node. Nothing is fetched ahead of demand, so taking the
    first k nodes costs exactly k adjacency calls.

    A crawler is single use; once exhausted it stays exhausted.
    """

    def __init__(self, provider: AdjacencyProvider[Node], start: Node) -> None:
        self.provider = provider
        self.start = start
        self._frontier: Deque[Node] = deque([start])
        self._visited: Set[Node] = set()

    def __iter__(self) -> Iterator[Node]:
        return self

    def __next__(self) -> Node:
        while self._frontier:
            node = self._frontier.popleft()
            if node in self._visited:
                continue

            for neighbor in self.provider.adjacent_nodes(node):
                # Dequeue-time check is authoritative; this only keeps the queue short.
                if neighbor not in self._visited:
                    self._frontier.append(neighbor)

            self._visited.add(node)
            return node

        raise StopIteration

    @property
    def visited(self) -> FrozenSet[Node]:
        return frozenset(self._visited)

    @property
    def pending(self) -> int:
        """Frontier length, duplicates included."""
        return len(self._frontier)


def crawl(
    start_url: str,
    config: Optional[CrawlConfig] = None,
    extractor: Optional[LinkExtractor] = None,
    on_page: Optional[Callable[[str], None]] = None,
) -> Tuple[List[str], CrawlStats]:
    """
    Crawl pages breadth-first from a URL, following every link.

    Args:
        start_url: The URL to start crawling from.
        config: Page limit, delay between pages, timeout and User-Agent.
        extractor: Link extractor to use; one is built from config if omitted.
        on_page: Called with each URL as soon as it has been crawled.

    Returns:
        Tuple of (visited URLs in crawl order, crawl statistics).
    """
    config = config or CrawlConfig()
    config.validate()

    try:
        start = normalize_url(start_url)
    except ValueError as e:
        raise ValueError(f"Invalid start URL: {start_url} ({e})") from e
    if not start:
        raise ValueError(f"Invalid start URL: {start_url}")

    if extractor is None:
        extractor = LinkExtractor(timeout_s=config.timeout_s, user_agent=config.user_agent)
    stats = extractor.stats

    log.info("Starting crawl from: %s", start)
    if config.max_pages is not None:
        log.info("Max pages: %d", config.max_pages)

    crawler = Crawler(extractor, start)
    results: List[str] = []

    while config.max_pages is None or len(results) < config.max_pages:
        if results and config.delay_s:
            time.sleep(config.delay_s)
        url = next(crawler, None)
        if url is None:
            break
        results.append(url)
        stats.pages_crawled += 1
        log.debug("[%d] Visited: %s | Queue: %d", len(results), url, crawler.pending)
        if on_page is not None:
            on_page(url)

    return results, stats
