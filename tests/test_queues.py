import asyncio

import pytest

from site_mapper.crawler.queues import ClosableQueue, QueueClosed


@pytest.mark.asyncio()
async def test_items_put_before_close_are_delivered():
    queue: ClosableQueue[int] = ClosableQueue("numbers")
    for i in range(3):
        queue.put_nowait(i)
    queue.close()

    assert [i async for i in queue] == [0, 1, 2]
    assert queue.closed


@pytest.mark.asyncio()
async def test_consumer_blocks_until_close():
    queue: ClosableQueue[str] = ClosableQueue()

    async def consume():
        return [item async for item in queue]

    consumer = asyncio.create_task(consume())
    await queue.put("a")
    await asyncio.sleep(0)
    assert not consumer.done()

    queue.close()
    assert await asyncio.wait_for(consumer, timeout=1) == ["a"]


@pytest.mark.asyncio()
async def test_get_after_drain_raises():
    queue: ClosableQueue[int] = ClosableQueue()
    queue.close()
    with pytest.raises(QueueClosed):
        await queue.get()
    with pytest.raises(QueueClosed):
        await queue.get()


def test_put_and_close_after_close_raise():
    queue: ClosableQueue[int] = ClosableQueue()
    queue.close()
    with pytest.raises(QueueClosed):
        queue.put_nowait(1)
    with pytest.raises(QueueClosed):
        queue.close()
