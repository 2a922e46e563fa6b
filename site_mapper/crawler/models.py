# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from site_mapper.crawler.errors import CrawlError


@dataclass(frozen=True, slots=True)
class Page:
    """A crawled page: its location, the raw hrefs it links to, or the error hit fetching it.

    ``links`` keeps document order and is not normalized or filtered.
    """

    location: str
    links: Tuple[str, ...] = ()
    error: Optional[CrawlError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return f"Page{{location: {self.location}, links: {list(self.links)}, error: {self.error}}}"
