"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the transport client, the stream
decoder and error classification helpers. Values are lowercase snake_case and
are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    INVALID_CREDENTIAL = "invalid_credential"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    PARSE = "parse"
    CONFIG = "config"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
