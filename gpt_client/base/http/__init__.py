"""HTTP utilities package.

Exposes the pooled ``httpx.AsyncClient`` factory.
"""

from .client import create_async_client

__all__ = ["create_async_client"]
