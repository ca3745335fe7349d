"""
Breadth-first link crawler: a lazy BFS traversal over any adjacency provider,
with a web provider that follows the links found in each page's HTML.
"""
__version__ = "1.0.0"

from linkcrawler.config import CrawlConfig
from linkcrawler.core import AdjacencyProvider, Crawler, crawl
from linkcrawler.links import CrawlStats, GetLinksError, LinkExtractor, normalize_url

__all__ = [
    "AdjacencyProvider",
    "CrawlConfig",
    "CrawlStats",
    "Crawler",
    "GetLinksError",
    "LinkExtractor",
    "crawl",
    "normalize_url",
]
