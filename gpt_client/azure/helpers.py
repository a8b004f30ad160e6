"""Header and payload helpers for the Azure chat client.

Keeps request shaping separate from the I/O in ``client.py``.

Notes:
    Consumers must define ``_api_key`` (str) and ``_config``
    (``GenerationConfig``) attributes.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import InvalidCredentialError
from ..base.models import CompletionRequest
from ..config.defaults import API_KEY_HEADER, EVENT_STREAM_ACCEPT, JSON_CONTENT_TYPE


def validate_header_value(value: str) -> str:
    """Return ``value`` if it can be sent as an HTTP header value.

    Visible ASCII, space and tab are accepted; anything else (non-ASCII,
    CR/LF and other control characters) raises ``InvalidCredentialError``.
    """
    for ch in value:
        code = ord(ch)
        if code > 0x7E or (code < 0x20 and ch != "\t"):
            raise InvalidCredentialError(f"credential contains forbidden character {code:#04x}")
    return value


class AzureRequestMixin:
    """Builds the header map and JSON body for one request."""

    def _build_headers(self, *, stream: bool) -> Dict[str, str]:
        """Credential and JSON content-type; streaming adds the SSE accept type."""
        headers = {
            API_KEY_HEADER: validate_header_value(self._api_key),
            "Content-Type": JSON_CONTENT_TYPE,
        }
        if stream:
            headers["Accept"] = EVENT_STREAM_ACCEPT
        return headers

    def _build_payload(self, message: str, *, stream: bool) -> Dict[str, Any]:
        return CompletionRequest.single(message, self._config, stream=stream).to_dict()


__all__ = ["AzureRequestMixin", "validate_header_value"]
