"""
Sampling/generation parameters for completion requests.

`GenerationConfig` is immutable once built. Every numeric field is clamped
into its documented range at construction time; out-of-range input is
silently saturated, never rejected. Two construction paths share the same
semantics: the pure ``GenerationConfig.create`` constructor and the fluent
``GenerationConfigBuilder``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from ...config.defaults import (
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESENCE_PENALTY,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    MIN_MAX_TOKENS,
    PENALTY_RANGE,
    TEMPERATURE_RANGE,
    TOP_P_RANGE,
)
from ..logging import get_logger, log_event

_logger = get_logger("gpt_client.config")


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, float(value)))


def _clamp_tokens(value: int) -> int:
    return max(MIN_MAX_TOKENS, int(value))


def _freeze_stop(stop: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    if stop is None:
        return None
    if isinstance(stop, str):
        return (stop,)
    return tuple(str(s) for s in stop)


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable, range-checked generation parameters.

    Attributes:
        temperature: Sampling temperature in ``[0.0, 2.0]``.
        max_tokens: Positive completion token budget.
        top_p: Nucleus sampling mass in ``[0.0, 1.0]``.
        frequency_penalty: Penalty in ``[-2.0, 2.0]``.
        presence_penalty: Penalty in ``[-2.0, 2.0]``.
        stop: Optional ordered stop sequences; ``None`` when absent.
    """

    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P
    frequency_penalty: float = DEFAULT_FREQUENCY_PENALTY
    presence_penalty: float = DEFAULT_PRESENCE_PENALTY
    stop: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        # Direct construction clamps too; frozen requires object.__setattr__.
        object.__setattr__(self, "temperature", _clamp(self.temperature, TEMPERATURE_RANGE))
        object.__setattr__(self, "max_tokens", _clamp_tokens(self.max_tokens))
        object.__setattr__(self, "top_p", _clamp(self.top_p, TOP_P_RANGE))
        object.__setattr__(self, "frequency_penalty", _clamp(self.frequency_penalty, PENALTY_RANGE))
        object.__setattr__(self, "presence_penalty", _clamp(self.presence_penalty, PENALTY_RANGE))
        object.__setattr__(self, "stop", _freeze_stop(self.stop))

    @classmethod
    def create(
        cls,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        frequency_penalty: Optional[float] = None,
        presence_penalty: Optional[float] = None,
        stop: Optional[Iterable[str]] = None,
    ) -> "GenerationConfig":
        """Build a config, substituting defaults for ``None`` fields."""
        return cls(
            temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
            max_tokens=DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
            top_p=DEFAULT_TOP_P if top_p is None else top_p,
            frequency_penalty=DEFAULT_FREQUENCY_PENALTY if frequency_penalty is None else frequency_penalty,
            presence_penalty=DEFAULT_PRESENCE_PENALTY if presence_penalty is None else presence_penalty,
            stop=stop,
        )

    @staticmethod
    def builder() -> "GenerationConfigBuilder":
        return GenerationConfigBuilder()

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire fields; ``stop`` is omitted entirely when absent."""
        payload: Dict[str, Any] = {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }
        if self.stop is not None:
            payload["stop"] = list(self.stop)
        return payload


class GenerationConfigBuilder:
    """Fluent builder; each setter clamps and returns the builder."""

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}

    def _set(self, name: str, raw: Any, value: Any) -> "GenerationConfigBuilder":
        log_event(_logger, "config.set", level=logging.DEBUG, field=name, raw=raw, value=value)
        self._fields[name] = value
        return self

    def temperature(self, value: float) -> "GenerationConfigBuilder":
        return self._set("temperature", value, _clamp(value, TEMPERATURE_RANGE))

    def max_tokens(self, value: int) -> "GenerationConfigBuilder":
        return self._set("max_tokens", value, _clamp_tokens(value))

    def top_p(self, value: float) -> "GenerationConfigBuilder":
        return self._set("top_p", value, _clamp(value, TOP_P_RANGE))

    def frequency_penalty(self, value: float) -> "GenerationConfigBuilder":
        return self._set("frequency_penalty", value, _clamp(value, PENALTY_RANGE))

    def presence_penalty(self, value: float) -> "GenerationConfigBuilder":
        return self._set("presence_penalty", value, _clamp(value, PENALTY_RANGE))

    def stop(self, sequences: Iterable[str]) -> "GenerationConfigBuilder":
        frozen = _freeze_stop(sequences)
        return self._set("stop", frozen, frozen)

    def build(self) -> GenerationConfig:
        """Finalize; unset fields fall back to the fixed defaults."""
        log_event(_logger, "config.build", level=logging.DEBUG, fields=sorted(self._fields))
        return replace(GenerationConfig(), **self._fields)


__all__ = ["GenerationConfig", "GenerationConfigBuilder"]
