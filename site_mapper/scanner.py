# === FILE: site_mapper/scanner.py ===
"""
Модуль-обёртка для запуска обхода сайта.
"""
from typing import Callable, List, Optional

from site_mapper.aggregator import CrawlReport, aggregate_results
from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.models import Page

PageCallback = Callable[[Page], None]


async def start_scan(cfg: CrawlerConfig, on_page: Optional[PageCallback] = None) -> CrawlReport:
    """
    Запускает AsyncCrawler в контексте, вызывает on_page для каждой страницы
    по мере поступления и возвращает итоговый CrawlReport.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    on_page : callable, optional
        Вызывается для каждой полученной страницы (например, печать в CLI).
    """
    pages: List[Page] = []
    async with AsyncCrawler(cfg) as crawler:
        async for page in crawler.crawl():
            pages.append(page)
            if on_page is not None:
                on_page(page)
        skipped = crawler.aggregator.pages_skipped if crawler.aggregator else 0
        elapsed = crawler.elapsed or 0.0
    return aggregate_results(cfg.base_url, pages, elapsed=elapsed, skipped=skipped)

__all__ = ["start_scan"]
