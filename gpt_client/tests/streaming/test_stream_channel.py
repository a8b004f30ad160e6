"""Bounded channel: backpressure, receiver drop and end-of-stream."""
from __future__ import annotations

import asyncio

import pytest

from gpt_client.base.streaming import StreamChannel


async def _spin(n: int = 5) -> None:
    for _ in range(n):
        await asyncio.sleep(0)


def test_default_capacity():
    async def main():
        return StreamChannel().capacity

    assert asyncio.run(main()) == 100


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        StreamChannel(capacity=0)


def test_send_blocks_when_full():
    async def main():
        ch: StreamChannel[int] = StreamChannel(capacity=2)

        async def produce():
            for i in range(3):
                await ch.send(i)

        task = asyncio.create_task(produce())
        await _spin()
        blocked = not task.done() and ch.pending() == 2
        first = await ch.receive()
        await asyncio.wait_for(task, timeout=1)
        return blocked, first, ch.pending()

    blocked, first, pending = asyncio.run(main())
    assert blocked
    assert first == 0
    assert pending == 2


def test_finish_drains_then_ends():
    async def main():
        ch: StreamChannel[str] = StreamChannel(capacity=4)
        await ch.send("a")
        await ch.send("b")
        await ch.finish()
        return [await ch.receive(), await ch.receive(), await ch.receive(), await ch.receive()]

    assert asyncio.run(main()) == ["a", "b", None, None]


def test_close_wakes_blocked_sender():
    async def main():
        ch: StreamChannel[int] = StreamChannel(capacity=1)
        assert await ch.send(1)
        task = asyncio.create_task(ch.send(2))
        await _spin()
        assert not task.done()
        await ch.close()
        return await asyncio.wait_for(task, timeout=1), ch.receiver_closed

    delivered, closed = asyncio.run(main())
    assert delivered is False
    assert closed


def test_send_after_close_is_discarded():
    async def main():
        ch: StreamChannel[int] = StreamChannel()
        await ch.close()
        return await ch.send(1), ch.pending(), await ch.receive()

    assert asyncio.run(main()) == (False, 0, None)


def test_drop_receiver_wakes_blocked_sender():
    async def main():
        ch: StreamChannel[int] = StreamChannel(capacity=1)
        await ch.send(1)
        task = asyncio.create_task(ch.send(2))
        await _spin()
        ch.drop_receiver(asyncio.get_running_loop())
        return await asyncio.wait_for(task, timeout=1), ch.pending()

    assert asyncio.run(main()) == (False, 0)
