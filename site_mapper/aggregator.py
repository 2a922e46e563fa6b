# File: site_mapper/aggregator.py
"""site_mapper.aggregator: Сводный отчёт по результатам обхода."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict, Union

from site_mapper.crawler.models import Page


class PageInfo(TypedDict):
    """Информация о странице в отчёте."""

    url: str
    links: List[str]
    error: Union[str, None]


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: страницы со ссылками и итоговая статистика."""

    base_url: str
    pages: List[PageInfo] = field(default_factory=list)
    elapsed: float = 0.0
    skipped: int = 0

    @property
    def pages_crawled(self) -> int:
        return len(self.pages)

    @property
    def error_count(self) -> int:
        return sum(1 for p in self.pages if p["error"] is not None)

    @property
    def rate(self) -> float:
        """Pages per second over the whole crawl."""
        return self.pages_crawled / self.elapsed if self.elapsed else 0.0

    def summary(self) -> str:
        return (
            f"Crawled {self.pages_crawled} pages in {self.elapsed:.3f}s "
            f"({self.rate:.2f} req/sec) with {self.error_count} errors"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "pages_crawled": self.pages_crawled,
            "errors": self.error_count,
            "skipped": self.skipped,
            "elapsed": round(self.elapsed, 3),
            "pages": list(self.pages),
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def page_info(page: Page) -> PageInfo:
    return {
        "url": page.location,
        "links": list(page.links),
        "error": str(page.error) if page.error is not None else None,
    }


def aggregate_results(
    base_url: str,
    pages: Iterable[Page],
    *,
    elapsed: float = 0.0,
    skipped: int = 0,
) -> CrawlReport:
    """Собирает страницы и статистику в CrawlReport."""
    return CrawlReport(
        base_url=base_url,
        pages=[page_info(p) for p in pages],
        elapsed=elapsed,
        skipped=skipped,
    )
