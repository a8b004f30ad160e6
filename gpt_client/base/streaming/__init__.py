"""Streaming package.

Exposes the fragment type, the bounded channel, the SSE decoder and the
consumer-facing stream handle under a single namespace.
"""

from .streaming import StreamFragment, accumulate_fragments
from .stream_channel import StreamChannel
from .sse_decoder import DecoderState, SseFrameDecoder, run_decoder
from .chat_stream import ChatStream

__all__ = [
    "StreamFragment",
    "accumulate_fragments",
    "StreamChannel",
    "DecoderState",
    "SseFrameDecoder",
    "run_decoder",
    "ChatStream",
]
