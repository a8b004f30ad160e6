"""Transport timeout configuration.

The stream decoder enforces no timeouts of its own; bounding how long a
request may block belongs to the transport layer. This module exposes the
values applied to the shared ``httpx.AsyncClient``.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever one of them changes). Supported variables:
        GPT_CLIENT_TIMEOUT_CONNECT_SECONDS
        GPT_CLIENT_TIMEOUT_READ_SECONDS
        GPT_CLIENT_TIMEOUT_WRITE_SECONDS
        GPT_CLIENT_TIMEOUT_POOL_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_NAMES = (
    "GPT_CLIENT_TIMEOUT_CONNECT_SECONDS",
    "GPT_CLIENT_TIMEOUT_READ_SECONDS",
    "GPT_CLIENT_TIMEOUT_WRITE_SECONDS",
    "GPT_CLIENT_TIMEOUT_POOL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_seconds: Establishing the TCP/TLS connection.
        read_seconds: Waiting for the next body chunk. Generous because a
            streamed completion may pause between deltas.
        write_seconds: Sending the request body.
        pool_seconds: Waiting for a free pooled connection.
    """

    connect_seconds: float = 10.0
    read_seconds: float = 120.0
    write_seconds: float = 30.0
    pool_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_seconds,
            read=self.read_seconds,
            write=self.write_seconds,
            pool=self.pool_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_seconds),
        read_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_seconds),
        write_seconds=_parse_env_float(_ENV_NAMES[2], defaults.write_seconds),
        pool_seconds=_parse_env_float(_ENV_NAMES[3], defaults.pool_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
