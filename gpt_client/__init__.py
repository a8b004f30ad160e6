"""gpt_client: async client for an Azure-hosted chat-completion deployment.

Public surface:
- AzureChatClient / AzureChatClientBuilder: ``ask`` and ``ask_stream``
- GenerationConfig / GenerationConfigBuilder: clamped sampling parameters
- ChatStream / StreamFragment: consumer side of a streamed completion
- Error taxonomy: GptClientError and its subclasses
"""

from .azure import AzureChatClient, AzureChatClientBuilder
from .base.errors import (
    ApiError,
    ConfigError,
    ErrorCode,
    GptClientError,
    InvalidCredentialError,
    ParseError,
    TransportError,
)
from .base.models import ChatMessage, CompletionRequest, CompletionResponse, GenerationConfig, GenerationConfigBuilder
from .base.streaming import ChatStream, StreamFragment, accumulate_fragments

__version__ = "0.1.0"

__all__ = [
    "AzureChatClient",
    "AzureChatClientBuilder",
    "GenerationConfig",
    "GenerationConfigBuilder",
    "ChatMessage",
    "CompletionRequest",
    "CompletionResponse",
    "ChatStream",
    "StreamFragment",
    "accumulate_fragments",
    "ErrorCode",
    "GptClientError",
    "TransportError",
    "InvalidCredentialError",
    "ApiError",
    "ParseError",
    "ConfigError",
]
