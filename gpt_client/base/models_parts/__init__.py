"""Model parts package: one DTO family per file.

Prefer importing from ``gpt_client.base.models`` for the stable surface.
"""

from .chat_message import ChatMessage
from .completion_request import CompletionRequest
from .completion_response import Choice, CompletionResponse, Delta, ResponseMessage
from .generation_config import GenerationConfig, GenerationConfigBuilder

__all__ = [
    "ChatMessage",
    "CompletionRequest",
    "Choice",
    "CompletionResponse",
    "Delta",
    "ResponseMessage",
    "GenerationConfig",
    "GenerationConfigBuilder",
]
