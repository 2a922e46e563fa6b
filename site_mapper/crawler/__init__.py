"""site_mapper.crawler: the concurrent crawl engine."""
from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.errors import CrawlError, HTTPStatusError, ParseError, TransportError
from site_mapper.crawler.models import Page
from site_mapper.crawler.queues import ClosableQueue, QueueClosed

__all__ = [
    "AsyncCrawler",
    "ClosableQueue",
    "CrawlError",
    "HTTPStatusError",
    "Page",
    "ParseError",
    "QueueClosed",
    "TransportError",
]
