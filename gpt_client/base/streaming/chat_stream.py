"""Consumer handle returned by ``AzureChatClient.ask_stream``.

Wraps the receiving end of the channel as an async iterator of
:class:`StreamFragment`. The handle is finite and not restartable: once the
decoder finishes (or the handle is closed) iteration stops for good.

Dropping the handle (``aclose``, leaving an ``async with`` block, or simply
discarding it) is the only cancellation mechanism; the decoder task notices
on its next send and stops reading.
"""
from __future__ import annotations

import asyncio
import weakref
from typing import List, Optional

from .stream_channel import StreamChannel
from .streaming import StreamFragment


class ChatStream:
    """Async iterator over the fragments of one streamed completion."""

    def __init__(self, channel: StreamChannel[StreamFragment], task: Optional[asyncio.Task] = None) -> None:
        self._channel = channel
        self._task = task
        self._exhausted = False
        # a handle discarded without aclose still releases the decoder
        self._finalizer = weakref.finalize(self, channel.drop_receiver, asyncio.get_running_loop())

    @property
    def decoder_task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def closed(self) -> bool:
        return self._exhausted

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> StreamFragment:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self._channel.receive()
        if item is None:
            self._exhausted = True
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        """Drop the receiving end; later sends by the decoder are discarded."""
        self._exhausted = True
        self._finalizer.detach()
        await self._channel.close()

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def collect(self) -> List[StreamFragment]:
        """Drain every remaining fragment, errors included."""
        return [frag async for frag in self]

    async def collect_text(self) -> str:
        """Concatenate remaining text fragments; raise the first error."""
        parts: List[str] = []
        async for frag in self:
            parts.append(frag.unwrap())
        return "".join(parts)


__all__ = ["ChatStream"]
