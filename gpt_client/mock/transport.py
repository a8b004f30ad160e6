"""Offline ``httpx`` transport mimicking the completion endpoint.

Purpose
-------
Let the CLI and higher-level tests exercise the real client, including the
SSE decoder, without network access. Requests are answered locally by an
``httpx.MockTransport``:

- ``stream=false``: one JSON body whose message echoes the user prompt.
- ``stream=true``: a role-only delta, one delta per word, then ``[DONE]``.

The credential header is checked for presence so header wiring stays honest.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx

from ..config.defaults import API_KEY_HEADER, SSE_DONE_SENTINEL

MOCK_API_URL = "https://mock.openai.azure.local/openai/deployments/mock/chat/completions"
MOCK_API_KEY = "mock-key"  # pragma: allowlist secret - offline transport only


def mock_reply(prompt: str) -> str:
    """Deterministic answer for ``prompt``."""
    return f"echo: {prompt}"


def sse_frame(payload: Any) -> bytes:
    """Encode one ``data: ...`` frame; dicts are JSON-serialized."""
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return f"data: {body}\n\n".encode("utf-8")


def _delta_chunk(content: str | None = None, role: str | None = None, finish: str | None = None) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    return {"id": "chatcmpl-mock", "choices": [{"index": 0, "delta": delta, "finish_reason": finish}]}


def stream_frames(reply: str) -> List[bytes]:
    """SSE frames for ``reply`` split on word boundaries."""
    words = reply.split(" ")
    frames = [sse_frame(_delta_chunk(content="", role="assistant"))]
    for i, word in enumerate(words):
        frames.append(sse_frame(_delta_chunk(content=word if i == 0 else " " + word)))
    frames.append(sse_frame(_delta_chunk(finish="stop")))
    frames.append(sse_frame(SSE_DONE_SENTINEL))
    return frames


def _last_user_prompt(body: Dict[str, Any]) -> str:
    for msg in reversed(body.get("messages") or []):
        if msg.get("role") == "user":
            return str(msg.get("content", ""))
    return ""


def _handle(request: httpx.Request) -> httpx.Response:
    if not request.headers.get(API_KEY_HEADER):
        return httpx.Response(401, json={"error": {"code": "401", "message": "Access denied due to missing api-key"}})
    try:
        body = json.loads(request.content or b"{}")
    except ValueError:
        return httpx.Response(400, json={"error": {"message": "request body is not JSON"}})
    reply = mock_reply(_last_user_prompt(body))
    if body.get("stream"):
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=b"".join(stream_frames(reply)),
        )
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-mock",
            "choices": [{"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": reply}}],
        },
    )


def build_mock_transport() -> httpx.MockTransport:
    return httpx.MockTransport(_handle)


__all__ = [
    "MOCK_API_URL",
    "MOCK_API_KEY",
    "build_mock_transport",
    "mock_reply",
    "sse_frame",
    "stream_frames",
]
