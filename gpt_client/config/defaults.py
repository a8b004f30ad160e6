"""gpt_client.config.defaults
=========================

Central place for small, stable default values used across the gpt_client
package and its CLI. These defaults can be overridden via environment
variables or explicit overrides, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing from other gpt_client packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Generation parameters ----
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 800
DEFAULT_TOP_P = 0.95
DEFAULT_FREQUENCY_PENALTY = 0.0
DEFAULT_PRESENCE_PENALTY = 0.0

# Inclusive clamp ranges (low, high).
TEMPERATURE_RANGE = (0.0, 2.0)
TOP_P_RANGE = (0.0, 1.0)
PENALTY_RANGE = (-2.0, 2.0)
MIN_MAX_TOKENS = 1

# ---- Request shape ----
DEFAULT_USER_ROLE = "user"
API_KEY_HEADER = "api-key"  # pragma: allowlist secret - header name, not a secret
JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_ACCEPT = "text/event-stream"

# ---- Streaming ----
# Pending fragments buffered between the decoder task and the consumer.
STREAM_CHANNEL_CAPACITY = 100
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"
SSE_FRAME_TERMINATOR = b"\n\n"

# ---- CLI ----
CLI_EXIT_COMMANDS = ("exit", "quit")
CLI_DEFAULT_STREAM = True


__all__ = [
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "DEFAULT_FREQUENCY_PENALTY",
    "DEFAULT_PRESENCE_PENALTY",
    "TEMPERATURE_RANGE",
    "TOP_P_RANGE",
    "PENALTY_RANGE",
    "MIN_MAX_TOKENS",
    "DEFAULT_USER_ROLE",
    "API_KEY_HEADER",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_ACCEPT",
    "STREAM_CHANNEL_CAPACITY",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "SSE_FRAME_TERMINATOR",
    "CLI_EXIT_COMMANDS",
    "CLI_DEFAULT_STREAM",
]
