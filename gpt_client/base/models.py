"""Request/response models public surface.

Re-exports the implementations under ``gpt_client.base.models_parts``.
"""

from .models_parts import (
    ChatMessage,
    Choice,
    CompletionRequest,
    CompletionResponse,
    Delta,
    GenerationConfig,
    GenerationConfigBuilder,
    ResponseMessage,
)

__all__ = [
    "ChatMessage",
    "Choice",
    "CompletionRequest",
    "CompletionResponse",
    "Delta",
    "GenerationConfig",
    "GenerationConfigBuilder",
    "ResponseMessage",
]
