"""Streaming primitives delivered to stream consumers.

Keeps the consumer-facing value type separate from the decoder so callers can
depend on it without importing the framing logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..errors import GptClientError


@dataclass(frozen=True)
class StreamFragment:
    """One item of a completion stream: a text fragment or an error.

    Exactly one of ``text`` and ``error`` is set.

    Fields:
      text: generated text carried by one SSE frame (never empty)
      error: structured failure for a frame or for the transport
    """

    text: Optional[str] = None
    error: Optional[GptClientError] = None

    @classmethod
    def success(cls, text: str) -> "StreamFragment":
        return cls(text=text)

    @classmethod
    def failure(cls, error: GptClientError) -> "StreamFragment":
        return cls(error=error)

    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> str:
        """Return the text, raising the carried error for error fragments."""
        if self.error is not None:
            raise self.error
        return self.text or ""


def accumulate_fragments(fragments: Iterable[StreamFragment]) -> str:
    """Concatenate fragment texts in order.

    Raises the first error fragment encountered; fragments after it are not
    inspected.
    """
    parts: List[str] = []
    for frag in fragments:
        parts.append(frag.unwrap())
    return "".join(parts)


__all__ = ["StreamFragment", "accumulate_fragments"]
