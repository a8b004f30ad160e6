"""SSE frame decoder for streamed chat completions.

Purpose:
    Turn the raw body of a ``stream=true`` completion into ordered
    :class:`StreamFragment` values and push them through a bounded
    :class:`StreamChannel` to the consumer.

Framing:
    - Raw bytes are appended to a buffer; every ``\\n\\n`` terminator closes
      one frame and the consumed bytes are discarded. Terminators and UTF-8
      code points split across chunks are therefore reassembled.
    - A frame must start with ``data: ``; other frames (comments, ``event:``
      lines, keep-alives) are ignored.
    - The ``[DONE]`` payload ends the stream; later frames, including those
      already buffered, are not processed.
    - Each payload is decoded as a ``CompletionResponse``. A frame that is not
      valid UTF-8 or JSON yields one ``ParseError`` fragment and decoding
      continues with the next frame.
    - Only non-empty ``choices[0].delta.content`` produces a text fragment;
      role-only and heartbeat deltas emit nothing.

Failure modes:
    A failing body read forwards a single ``TransportError`` fragment and
    stops reading. No retries.

State machine:
    ``READING`` -> ``DONE`` on sentinel, receiver closed, transport error or
    end of body. Nothing leaves ``DONE``.
"""

from __future__ import annotations

from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, List, Optional

import httpx

from ...config.defaults import SSE_DATA_PREFIX, SSE_DONE_SENTINEL, SSE_FRAME_TERMINATOR
from ..errors import ParseError, TransportError, classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import CompletionResponse
from .stream_channel import StreamChannel
from .streaming import StreamFragment

_logger = get_logger("gpt_client.stream")


class DecoderState(str, Enum):
    READING = "reading"
    DONE = "done"


class SseFrameDecoder:
    """Synchronous frame reassembler; performs no I/O.

    ``feed`` accepts arbitrary byte chunks and returns the fragments produced
    by every frame completed so far, in wire order.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.state = DecoderState.READING
        self.done_reason: Optional[str] = None
        self.frames_seen = 0
        self.frames_ignored = 0

    @property
    def done(self) -> bool:
        return self.state is DecoderState.DONE

    def buffered(self) -> int:
        """Number of bytes waiting for a frame terminator."""
        return len(self._buffer)

    def feed(self, chunk: bytes) -> List[StreamFragment]:
        if self.done:
            return []
        self._buffer.extend(chunk)
        out: List[StreamFragment] = []
        while not self.done:
            idx = self._buffer.find(SSE_FRAME_TERMINATOR)
            if idx < 0:
                break
            frame = bytes(self._buffer[:idx])
            del self._buffer[: idx + len(SSE_FRAME_TERMINATOR)]
            self.frames_seen += 1
            fragment = self._decode_frame(frame)
            if fragment is not None:
                out.append(fragment)
        return out

    def mark_done(self, reason: str) -> None:
        if not self.done:
            self.state = DecoderState.DONE
            self.done_reason = reason

    def _decode_frame(self, frame: bytes) -> Optional[StreamFragment]:
        try:
            text = frame.decode("utf-8")
        except UnicodeDecodeError as e:
            return StreamFragment.failure(ParseError(f"frame is not valid UTF-8: {e.reason}", raw=e))
        if not text.startswith(SSE_DATA_PREFIX):
            self.frames_ignored += 1
            return None
        payload = text[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            self.mark_done("sentinel")
            return None
        try:
            chunk = CompletionResponse.parse_json(payload)
        except ParseError as e:
            return StreamFragment.failure(e)
        content = chunk.first_delta_content()
        if content:
            return StreamFragment.success(content)
        return None


async def run_decoder(
    body: AsyncIterator[bytes],
    channel: StreamChannel[StreamFragment],
    *,
    ctx: Optional[LogContext] = None,
    on_close: Optional[Callable[[], Awaitable[None]]] = None,
) -> SseFrameDecoder:
    """Drive ``SseFrameDecoder`` from ``body`` into ``channel``.

    Runs as an independent task. The channel is always finished on exit and
    ``on_close`` (typically ``response.aclose``) is awaited so the connection
    returns to the pool; an HTTP error raised while closing is logged as
    ``stream.close_error`` rather than propagated.

    Returns:
        The decoder, for inspection of its final state and counters.
    """
    decoder = SseFrameDecoder()
    emitted = 0
    try:
        async for chunk in body:
            for fragment in decoder.feed(chunk):
                if fragment.is_error():
                    normalized_log_event(
                        _logger,
                        "stream.frame_error",
                        ctx,
                        phase="decode",
                        error_code=fragment.error.code.value,
                        emitted=False,
                        detail=fragment.error.message,
                    )
                if not await channel.send(fragment):
                    decoder.mark_done("receiver_closed")
                    break
                if not fragment.is_error():
                    emitted += 1
            if decoder.done:
                break
        else:
            if decoder.buffered():
                normalized_log_event(
                    _logger,
                    "stream.trailing_discarded",
                    ctx,
                    phase="decode",
                    emitted=None,
                    bytes=decoder.buffered(),
                )
            decoder.mark_done("end_of_body")
    except (httpx.HTTPError, httpx.StreamError) as e:
        err = TransportError(str(e) or type(e).__name__, raw=e, code=classify_exception(e))
        normalized_log_event(
            _logger,
            "stream.transport_error",
            ctx,
            phase="read",
            error_code=err.code.value,
            emitted=False,
            detail=err.message,
        )
        decoder.mark_done("transport_error")
        await channel.send(StreamFragment.failure(err))
    finally:
        await channel.finish()
        if on_close is not None:
            try:
                await on_close()
            except httpx.HTTPError as e:
                normalized_log_event(
                    _logger,
                    "stream.close_error",
                    ctx,
                    phase="finalize",
                    error_code=classify_exception(e).value,
                    emitted=None,
                    detail=str(e),
                )
    normalized_log_event(
        _logger,
        "stream.end",
        ctx,
        phase="finalize",
        emitted=emitted > 0,
        fragments=emitted,
        frames=decoder.frames_seen,
        reason=decoder.done_reason,
    )
    return decoder


__all__ = ["DecoderState", "SseFrameDecoder", "run_decoder"]
