# site_mapper/crawler/frontier.py
"""
Frontier: the single owner of the visited set.

Candidates arrive through :meth:`Frontier.enqueue`; one dispatch loop resolves
each against the domain root, drops out-of-host and already-seen URLs, and
hands every new URL to the ``dispatch`` callback, which starts its fetch.
"""
from __future__ import annotations

from typing import Callable, Set

from site_mapper.crawler.queues import ClosableQueue
from site_mapper.crawler.tracker import CompletionTracker
from site_mapper.logger import get_logger
from site_mapper.utils import in_scope, resolve_url


class Frontier:
    def __init__(self, domain: str, tracker: CompletionTracker) -> None:
        self.domain = domain
        self.tracker = tracker
        self.candidates: ClosableQueue[str] = ClosableQueue("candidates")
        self._visited: Set[str] = set()
        self.logger = get_logger("frontier")

    def enqueue(self, url: str) -> None:
        """Count *url* as pending work and queue it for a visit decision."""
        self.tracker.increment()
        self.candidates.put_nowait(url)

    async def run(self, dispatch: Callable[[str], None]) -> None:
        """Drain candidates until the queue is closed.

        ``dispatch`` takes ownership of the pending count for every URL it is
        given; rejected candidates are resolved here.
        """
        async for candidate in self.candidates:
            url = resolve_url(self.domain, candidate)
            if not in_scope(self.domain, url):
                self.logger.debug("Out of scope: %s", url)
                self.tracker.decrement()
                continue
            if url in self._visited:
                self.tracker.decrement()
                continue
            self._visited.add(url)
            self.logger.debug("Dispatching %s", url)
            dispatch(url)

    def close(self) -> None:
        self.candidates.close()
