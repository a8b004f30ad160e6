"""
Outbound chat message DTO.

`ChatMessage` pairs a free-form role string (e.g. ``"user"``) with plain text
content. It is only ever serialized into requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ...config.defaults import DEFAULT_USER_ROLE


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message sent to the completion endpoint."""

    role: str
    content: str

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=DEFAULT_USER_ROLE, content=content)

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage"]
