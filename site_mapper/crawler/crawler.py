# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Coroutine, List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.errors import CrawlError
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Page
from site_mapper.crawler.queues import ClosableQueue
from site_mapper.crawler.results import ResultAggregator
from site_mapper.crawler.tracker import CompletionTracker
from site_mapper.logger import get_logger

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Асинхронный краулер одного домена: страницы выдаются в поток по мере загрузки.

    One task drains the frontier, one task aggregates fetch outcomes, and one
    task is spawned per accepted URL. A waiter closes every queue once the
    completion tracker reaches zero.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.domain: str = config.base_url
        self.session = session
        self._owns_session = session is None
        self.logger = get_logger("crawler")
        self._tasks: Set[asyncio.Task] = set()
        self._started_at: Optional[float] = None
        self.elapsed: Optional[float] = None
        self.tracker: Optional[CompletionTracker] = None
        self.frontier: Optional[Frontier] = None
        self.aggregator: Optional[ResultAggregator] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def crawl(self) -> ClosableQueue[Page]:
        """Start crawling and return the page stream immediately.

        The stream is closed exactly once, when no work is pending; iterate
        it with ``async for`` to receive every page.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        if self._started_at is not None:
            raise RuntimeError("crawl() may only be called once per crawler")

        self.logger.info("Start crawl: %s", self.domain)
        self._started_at = time.monotonic()

        output: ClosableQueue[Page] = ClosableQueue("pages")
        self.tracker = CompletionTracker()
        self.frontier = Frontier(self.domain, self.tracker)
        self.aggregator = ResultAggregator(self.frontier, self.tracker, output)
        self.fetcher = Fetcher(self.session, self.config.max_concurrency)

        self._spawn(self.frontier.run(self._dispatch))
        self._spawn(self.aggregator.run())
        self.frontier.enqueue(self.domain)
        self._spawn(self._close_when_idle(output))
        return output

    async def collect(self) -> List[Page]:
        """Run the crawl to completion and return every page."""
        return [page async for page in self.crawl()]

    def _dispatch(self, url: str) -> None:
        self._spawn(self._visit(url))

    async def _visit(self, url: str) -> None:
        try:
            outcome = await self.fetcher.fetch(url)
        except Exception as exc:
            self.logger.exception("Unexpected failure fetching %s", url)
            err = CrawlError(f"unexpected failure fetching {url}: {exc!r}")
            err.__cause__ = exc
            outcome = Page(location=url, error=err)
        self.aggregator.outcomes.put_nowait(outcome)

    async def _close_when_idle(self, output: ClosableQueue[Page]) -> None:
        await self.tracker.wait_zero()
        output.close()
        self.frontier.close()
        self.aggregator.close()

        self.elapsed = time.monotonic() - (self._started_at or 0.0)
        emitted = self.aggregator.pages_emitted
        self.logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с), ошибок: %d, пропущено не-HTML: %d",
            emitted,
            self.elapsed,
            emitted / self.elapsed if self.elapsed else 0,
            self.aggregator.errors,
            self.aggregator.pages_skipped,
        )

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Crawler task failed", exc_info=task.exception())
