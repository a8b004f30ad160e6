"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `gpt_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .client_error import (
    ApiError,
    ConfigError,
    GptClientError,
    InvalidCredentialError,
    ParseError,
    TransportError,
)
from .classification import classify_exception, code_for_status

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
