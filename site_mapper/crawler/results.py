# site_mapper/crawler/results.py
"""
Result aggregation: feeds discovered links back to the frontier and forwards
finished pages to the output stream.
"""
from __future__ import annotations

from typing import Optional

from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.models import Page
from site_mapper.crawler.queues import ClosableQueue
from site_mapper.crawler.tracker import CompletionTracker
from site_mapper.logger import get_logger

#: a Page, or None for a skipped non-HTML response
FetchOutcome = Optional[Page]


class ResultAggregator:
    def __init__(
        self,
        frontier: Frontier,
        tracker: CompletionTracker,
        output: ClosableQueue[Page],
    ) -> None:
        self.frontier = frontier
        self.tracker = tracker
        self.output = output
        self.outcomes: ClosableQueue[FetchOutcome] = ClosableQueue("results")
        self.pages_emitted = 0
        self.pages_skipped = 0
        self.errors = 0
        self.logger = get_logger("results")

    async def run(self) -> None:
        async for page in self.outcomes:
            if page is None:
                self.pages_skipped += 1
            else:
                # links are queued before this page is resolved so pending never dips to zero early
                for link in page.links:
                    self.frontier.enqueue(link)
                self.logger.debug("Collected %s (%d links)", page.location, len(page.links))
                await self.output.put(page)
                self.pages_emitted += 1
                if page.error is not None:
                    self.errors += 1
            self.tracker.decrement()

    def close(self) -> None:
        self.outcomes.close()
