"""
CompletionRequest DTO: the outbound JSON body.

Holds the ordered message list, the generation parameters flattened into the
top level, and the ``stream`` flag. ``to_dict`` produces the exact wire shape:
an absent ``stop`` is left out of the payload rather than sent as ``null``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .chat_message import ChatMessage
from .generation_config import GenerationConfig


@dataclass
class CompletionRequest:
    """Request body sent to the chat-completions endpoint.

    Attributes:
        messages: Ordered chat messages (the client sends exactly one).
        config: Generation parameters flattened into the payload.
        stream: Whether the server should answer with SSE frames.
    """

    messages: List[ChatMessage]
    config: GenerationConfig = field(default_factory=GenerationConfig)
    stream: bool = False

    @classmethod
    def single(cls, message: str, config: GenerationConfig, *, stream: bool = False) -> "CompletionRequest":
        """Build the one-user-message request used by ``ask``/``ask_stream``."""
        return cls(messages=[ChatMessage.user(message)], config=config, stream=stream)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-serializable wire payload."""
        payload: Dict[str, Any] = {"messages": [m.to_dict() for m in self.messages]}
        payload |= self.config.to_payload()
        payload["stream"] = self.stream
        return payload


__all__ = ["CompletionRequest"]
