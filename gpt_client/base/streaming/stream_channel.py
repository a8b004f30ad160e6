"""Bounded single-producer channel between the decoder task and a consumer.

Semantics
---------
- ``send`` suspends while ``capacity`` items are pending, so a slow consumer
  exerts backpressure on the decoder.
- Once the receiver is closed, ``send`` returns ``False`` and the item is
  discarded; this is the only cancellation signal the decoder observes.
  Closing also wakes a sender blocked on a full channel.
- ``finish`` marks end-of-stream without waiting for capacity; the receiver
  drains what is pending and then observes exhaustion (``None``).
- ``drop_receiver`` closes from synchronous code (finalizers); the wake-up
  of a blocked sender runs on the owning loop.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Generic, Optional, Set, TypeVar

from ...config.defaults import STREAM_CHANNEL_CAPACITY

T = TypeVar("T")


class StreamChannel(Generic[T]):
    """Bounded FIFO channel with receiver-drop semantics."""

    def __init__(self, capacity: int = STREAM_CHANNEL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("channel capacity must be positive")
        self._capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = asyncio.Condition()
        self._finished = False
        self._receiver_closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def receiver_closed(self) -> bool:
        return self._receiver_closed

    @property
    def finished(self) -> bool:
        return self._finished

    def pending(self) -> int:
        return len(self._items)

    async def send(self, item: T) -> bool:
        """Enqueue ``item``; return ``False`` if the receiver is gone."""
        async with self._cond:
            await self._cond.wait_for(lambda: self._receiver_closed or len(self._items) < self._capacity)
            if self._receiver_closed:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    async def finish(self) -> None:
        """Mark the producer side complete."""
        async with self._cond:
            self._finished = True
            self._cond.notify_all()

    async def receive(self) -> Optional[T]:
        """Return the next item, or ``None`` once finished and drained."""
        async with self._cond:
            await self._cond.wait_for(lambda: bool(self._items) or self._finished or self._receiver_closed)
            if self._items and not self._receiver_closed:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            return None

    async def close(self) -> None:
        """Drop the receiving end; pending and future items are discarded."""
        async with self._cond:
            self._receiver_closed = True
            self._items.clear()
            self._cond.notify_all()

    def drop_receiver(self, loop: asyncio.AbstractEventLoop) -> None:
        """Synchronous form of ``close`` for callers outside a coroutine.

        The flag is set at once; waking blocked senders is scheduled on
        ``loop`` because the condition may only be notified from it.
        """
        if self._receiver_closed:
            return
        self._receiver_closed = True
        self._items.clear()
        if not self._finished and not loop.is_closed():
            loop.call_soon_threadsafe(_schedule_close, loop, self)


_CLOSE_TASKS: Set["asyncio.Task[None]"] = set()


def _schedule_close(loop: asyncio.AbstractEventLoop, channel: "StreamChannel") -> None:
    task = loop.create_task(channel.close())
    _CLOSE_TASKS.add(task)
    task.add_done_callback(_CLOSE_TASKS.discard)


__all__ = ["StreamChannel"]
