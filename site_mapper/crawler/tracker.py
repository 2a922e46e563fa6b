# site_mapper/crawler/tracker.py
"""
Pending-work counter that signals quiescence.
"""
from __future__ import annotations

import asyncio

from site_mapper.logger import get_logger


class CompletionTracker:
    """Counts enqueued-but-unresolved URLs and fires once when the count returns to zero.

    ``increment()`` is called once per enqueued candidate and ``decrement()``
    exactly once per final disposition of that candidate. The zero event is
    only armed after the first increment, so a tracker that never saw work
    does not report completion.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._zero = asyncio.Event()
        self.logger = get_logger("tracker")

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def done(self) -> bool:
        return self._zero.is_set()

    def increment(self) -> None:
        if self._zero.is_set():
            raise RuntimeError("work added after the crawl reached quiescence")
        self._pending += 1

    def decrement(self) -> None:
        if self._pending <= 0:
            raise RuntimeError("pending counter decremented below zero")
        self._pending -= 1
        if self._pending == 0:
            self.logger.debug("Pending work drained")
            self._zero.set()

    async def wait_zero(self) -> None:
        await self._zero.wait()
