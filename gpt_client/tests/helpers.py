"""Shared helpers for client and streaming tests.

Provides a ``MockTransport``-backed client factory and byte streams that
deliver SSE bodies in controlled chunks (or fail mid-body).
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Iterable, List, Optional

import httpx

from gpt_client.azure import AzureChatClient
from gpt_client.base.models import GenerationConfig

TEST_URL = "https://example.openai.azure.com/openai/deployments/gpt/chat/completions?api-version=2024-02-01"
TEST_KEY = "sk-unit-key"  # pragma: allowlist secret - fake credential


def make_client(
    handler: Callable[[httpx.Request], Any],
    *,
    config: Optional[GenerationConfig] = None,
    api_key: str = TEST_KEY,
    api_url: str = TEST_URL,
) -> AzureChatClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    builder = AzureChatClient.builder().api_url(api_url).api_key(api_key).http_client(http)
    if config is not None:
        builder.config(config)
    return builder.build()


def delta_frame(content: Optional[str] = None, role: Optional[str] = None) -> bytes:
    delta = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    payload = {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": delta, "finish_reason": None}]}
    return f"data: {json.dumps(payload)}\n\n".encode("utf-8")


DONE_FRAME = b"data: [DONE]\n\n"


class ChunkedStream(httpx.AsyncByteStream):
    """Yields the given chunks verbatim, optionally waiting on gates."""

    def __init__(self, chunks: Iterable[bytes], gates: Optional[dict] = None) -> None:
        self._chunks: List[bytes] = list(chunks)
        # index -> asyncio.Event awaited before yielding that chunk
        self._gates = gates or {}
        self.closed = False

    async def __aiter__(self):
        for i, chunk in enumerate(self._chunks):
            gate = self._gates.get(i)
            if gate is not None:
                await gate.wait()
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


class FailingStream(httpx.AsyncByteStream):
    """Yields ``chunks`` then raises ``httpx.ReadError``."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk
        raise httpx.ReadError("connection reset by peer")


async def aiter_chunks(chunks: Iterable[bytes]):
    for chunk in chunks:
        await asyncio.sleep(0)
        yield chunk


async def failing_chunks(chunks: Iterable[bytes]):
    for chunk in chunks:
        yield chunk
    raise httpx.RemoteProtocolError("peer closed connection without sending complete message body")
