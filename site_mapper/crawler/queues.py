# site_mapper/crawler/queues.py
"""
Unbounded asyncio queue that can be closed exactly once.

Items put before :meth:`ClosableQueue.close` are still delivered; iteration
stops once the close marker is reached. Used for the candidate URL queue, the
fetch result queue and the page stream handed to callers.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Generic, TypeVar, Union

T = TypeVar("T")


class QueueClosed(RuntimeError):
    """Raised on put() or close() after the queue has been closed."""


class _Closed:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<closed>"


_CLOSED = _Closed()


class ClosableQueue(Generic[T]):
    def __init__(self, name: str = "queue") -> None:
        self.name = name
        self._queue: asyncio.Queue[Union[T, _Closed]] = asyncio.Queue()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put_nowait(self, item: T) -> None:
        if self._closed:
            raise QueueClosed(f"{self.name} is closed")
        self._queue.put_nowait(item)

    async def put(self, item: T) -> None:
        self.put_nowait(item)

    def close(self) -> None:
        if self._closed:
            raise QueueClosed(f"{self.name} is already closed")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def get(self) -> T:
        """Next item; raises :class:`QueueClosed` once the queue is closed and drained."""
        if self._drained:
            raise QueueClosed(f"{self.name} is closed")
        item = await self._queue.get()
        if isinstance(item, _Closed):
            self._drained = True
            raise QueueClosed(f"{self.name} is closed")
        return item

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            try:
                item = await self.get()
            except QueueClosed:
                return
            yield item

    def qsize(self) -> int:
        return self._queue.qsize() - (1 if self._closed and not self._drained else 0)
