"""Unified configuration layer for the client.

Goals
-----
* Centralize defaults (generation parameters, endpoint env names).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. ``.env`` file (only fills unset or placeholder variables)
    3. Environment variables (``AZUREOPENAI_API_URL``, ``AZUREOPENAI_API_KEY``,
       ``AZUREOPENAI_TEMPERATURE`` ...)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_client_config()``.

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* generation_config_from(cfg: dict) -> GenerationConfig
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .defaults import (
    DEFAULT_FREQUENCY_PENALTY,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESENCE_PENALTY,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
)
from .env import GENERATION_ENV_MAP, is_placeholder, resolve_env

DEFAULTS: Dict[str, Any] = {
    "api_url": None,
    "api_key": None,
    "temperature": DEFAULT_TEMPERATURE,
    "max_tokens": DEFAULT_MAX_TOKENS,
    "top_p": DEFAULT_TOP_P,
    "frequency_penalty": DEFAULT_FREQUENCY_PENALTY,
    "presence_penalty": DEFAULT_PRESENCE_PENALTY,
    "stop": None,
}

_FLOAT_FIELDS = ("temperature", "top_p", "frequency_penalty", "presence_penalty")

_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                if k.startswith("export "):
                    k = k[len("export "):].strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _reset_dotenv_state() -> None:
    """Allow tests to force a re-read of the ``.env`` file."""
    global _DOTENV_LOADED
    _DOTENV_LOADED = False


def _coerce(field: str, raw: str) -> Any:
    """Convert an environment string into the field's native type.

    Unparseable numbers are ignored (``None``) so the default applies.
    """
    if field == "stop":
        parts = [p for p in raw.split(",") if p]
        return parts or None
    try:
        if field == "max_tokens":
            return int(raw)
        if field in _FLOAT_FIELDS:
            return float(raw)
    except ValueError:
        return None
    return raw


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ("api_url", "api_key"):
        val, _ = resolve_env(field)
        if val is not None and not is_placeholder(val):
            out[field] = val
    for field, name in GENERATION_ENV_MAP.items():
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            continue
        val = _coerce(field, raw.strip())
        if val is not None:
            out[field] = val
    return out


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> .env -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def generation_config_from(cfg: Dict[str, Any]):
    """Build a clamped ``GenerationConfig`` from a merged config mapping."""
    # Local import to break the config <-> models import cycle.
    from ..base.models import GenerationConfig

    return GenerationConfig.create(
        temperature=cfg.get("temperature"),
        max_tokens=cfg.get("max_tokens"),
        top_p=cfg.get("top_p"),
        frequency_penalty=cfg.get("frequency_penalty"),
        presence_penalty=cfg.get("presence_penalty"),
        stop=cfg.get("stop"),
    )


__all__ = [
    "DEFAULTS",
    "get_client_config",
    "generation_config_from",
]
