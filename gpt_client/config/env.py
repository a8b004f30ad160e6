"""gpt_client.config.env
=====================

Environment variable mapping and helpers for the endpoint URL and credential.

Design Notes
------------
- Canonical names are defined in ``ENV_MAP``. Azure tooling has shipped more
  than one spelling over time; list accepted spellings in ``ENV_ALIASES``
  with the canonical name first to establish precedence.
- Helpers never raise on missing variables; callers decide how to proceed
  (the client builder raises ``ConfigError`` when a required value is absent).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Config field → canonical env var
ENV_MAP: Dict[str, str] = {
    "api_url": "AZUREOPENAI_API_URL",
    "api_key": "AZUREOPENAI_API_KEY",  # pragma: allowlist secret - env var name
}

# Config field → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "api_url": ("AZUREOPENAI_API_URL", "AZURE_OPENAI_ENDPOINT"),
    "api_key": ("AZUREOPENAI_API_KEY", "AZURE_OPENAI_API_KEY"),
}

# Generation overrides read from the environment (field → env var).
GENERATION_ENV_MAP: Dict[str, str] = {
    "temperature": "AZUREOPENAI_TEMPERATURE",
    "max_tokens": "AZUREOPENAI_MAX_TOKENS",
    "top_p": "AZUREOPENAI_TOP_P",
    "frequency_penalty": "AZUREOPENAI_FREQUENCY_PENALTY",
    "presence_penalty": "AZUREOPENAI_PRESENCE_PENALTY",
    "stop": "AZUREOPENAI_STOP",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your-', or starts with
    'test_'. The check is case-insensitive and ignores surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or v.startswith("your-")
        or v.startswith("test_")
    )


def get_env_var_candidates(field: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a config field.

    The canonical name is yielded first, followed by any aliases.
    """
    canonical = ENV_MAP.get(field)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(field, ()):
        if alias != canonical:
            yield alias


def resolve_env(field: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a config field from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        (value, env_var_used) for the first non-empty candidate, or
        (None, None) when nothing is set.
    """
    for name in get_env_var_candidates(field):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "GENERATION_ENV_MAP",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env",
]
