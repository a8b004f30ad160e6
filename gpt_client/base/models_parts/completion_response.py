"""
Pydantic models for inbound completion payloads.

One shape serves both request modes: a non-streaming body populates
``choices[].message`` while each streamed SSE payload populates
``choices[].delta``. Unknown keys are ignored so provider additions (usage,
content filter results) never break parsing.

Failure semantics: ``CompletionResponse.parse_json`` raises ``ParseError`` on
JSON decode or validation failure (including a missing ``choices`` list); it
never returns a partial object.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ParseError


class _Inbound(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ResponseMessage(_Inbound):
    """A complete assistant message in a non-streaming response."""

    content: Optional[str] = None
    role: Optional[str] = None


class Delta(_Inbound):
    """A partial update; ``role`` typically appears on the first delta only."""

    content: Optional[str] = None
    role: Optional[str] = None


class Choice(_Inbound):
    """One completion choice carrying either a message or a delta."""

    index: int = 0
    finish_reason: Optional[str] = None
    message: Optional[ResponseMessage] = None
    delta: Optional[Delta] = None


class CompletionResponse(_Inbound):
    """Top-level completion payload (complete body or one stream chunk)."""

    id: Optional[str] = None
    choices: List[Choice]

    @classmethod
    def parse_json(cls, data: Union[str, bytes]) -> "CompletionResponse":
        """Decode and validate ``data``.

        Raises:
            ParseError: When the text is not JSON or does not match the shape.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ParseError(_summarize(e), raw=e) from e

    def first_message_content(self) -> str:
        """Return the first choice's message content.

        Raises:
            ParseError: When choices are empty or message/content is absent.
        """
        if not self.choices:
            raise ParseError("No response choices available")
        message = self.choices[0].message
        if message is None or message.content is None:
            raise ParseError("First choice has no message content")
        return message.content

    def first_delta_content(self) -> Optional[str]:
        """Return the first choice's delta content, or ``None`` when absent."""
        if not self.choices:
            return None
        delta = self.choices[0].delta
        return delta.content if delta is not None else None


def _summarize(err: ValidationError) -> str:
    first = err.errors()[0] if err.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", str(err))
    return f"{msg} at {loc}" if loc else msg


__all__ = ["ResponseMessage", "Delta", "Choice", "CompletionResponse"]
