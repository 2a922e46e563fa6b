# site_mapper/crawler/errors.py
"""
Page-level error taxonomy for the SiteMapper crawler.

Every failure below is attached to a :class:`~site_mapper.crawler.models.Page`
as data; none of them aborts a crawl.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for errors reported on a crawled page."""


class TransportError(CrawlError):
    """Connection, DNS or timeout failure while issuing the GET."""


class HTTPStatusError(CrawlError):
    """Raised for a response outside the 2xx range."""

    def __init__(self, url: str, status: int, reason: Optional[str] = None) -> None:
        self.url = url
        self.status = status
        self.reason = reason or ""
        status_line = f"{status} {self.reason}".strip()
        super().__init__(f"non-successful response from '{url}', status: '{status_line}'")


class ParseError(CrawlError):
    """The HTML body could not be parsed."""


__all__ = ["CrawlError", "TransportError", "HTTPStatusError", "ParseError"]
