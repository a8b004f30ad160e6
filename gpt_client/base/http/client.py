"""Shared ``httpx.AsyncClient`` factory.

Purpose:
    Build the connection-pooled asynchronous client owned by each
    ``AzureChatClient``. Timeouts derive exclusively from
    :func:`get_timeout_config`; no numeric literals are introduced here.

Lifecycle:
    The returned client is owned by the caller, which closes it through
    ``aclose()``. A single client is safe to share across concurrent requests
    on one event loop; the stream decoder only reads the response it was
    handed.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..timeouts import get_timeout_config

# Upper bound on pooled connections per client.
_POOL_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=10)


def create_async_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Return a new pooled ``httpx.AsyncClient``.

    Parameters:
        transport: Optional custom transport (e.g. ``httpx.MockTransport``
            for offline use and tests).
    """
    timeout = get_timeout_config().to_httpx()
    if transport is not None:
        return httpx.AsyncClient(timeout=timeout, transport=transport)
    return httpx.AsyncClient(timeout=timeout, limits=_POOL_LIMITS)


__all__ = ["create_async_client"]
