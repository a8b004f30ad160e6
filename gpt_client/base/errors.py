"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``gpt_client.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.client_error import (
    ApiError,
    ConfigError,
    GptClientError,
    InvalidCredentialError,
    ParseError,
    TransportError,
)
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "GptClientError",
    "TransportError",
    "InvalidCredentialError",
    "ApiError",
    "ParseError",
    "ConfigError",
    "classify_exception",
    "code_for_status",
]
