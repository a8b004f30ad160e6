"""
Structured client error exception types.

`GptClientError` carries a normalized `ErrorCode` for consistent handling and
structured logging. The concrete subclasses mirror the failure kinds callers
need to distinguish: transport failures, unusable credentials, non-2xx API
responses, undecodable payloads and incomplete builder configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class GptClientError(Exception):
    """Base structured error raised by the client.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


class TransportError(GptClientError):
    """Network or connection failure (send, body read, premature close)."""

    def __init__(self, message: str, raw: Optional[Exception] = None, code: ErrorCode = ErrorCode.TRANSPORT) -> None:
        super().__init__(code=code, message=f"HTTP request failed: {message}", raw=raw)


class InvalidCredentialError(GptClientError):
    """The credential string cannot be used as an HTTP header value."""

    def __init__(self, message: str, raw: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIAL, message=f"Invalid header value: {message}", raw=raw)


class ApiError(GptClientError):
    """Non-2xx HTTP response; carries the status code and body text."""

    def __init__(self, status_code: int, body: str, code: ErrorCode = ErrorCode.UNKNOWN) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(code=code, message=f"API response error: {status_code} - {body}")


class ParseError(GptClientError):
    """JSON decode failure or structurally valid JSON missing expected fields."""

    def __init__(self, detail: str, raw: Optional[Exception] = None) -> None:
        self.detail = detail
        super().__init__(code=ErrorCode.PARSE, message=f"Failed to parse API response: {detail}", raw=raw)


class ConfigError(GptClientError):
    """A required builder field was missing at construction time."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(code=ErrorCode.CONFIG, message=f"Configuration error: {detail}")


__all__ = [
    "GptClientError",
    "TransportError",
    "InvalidCredentialError",
    "ApiError",
    "ParseError",
    "ConfigError",
]
