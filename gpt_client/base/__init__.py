"""Base layer: errors, logging, timeouts, HTTP, models and streaming.

Submodules are imported explicitly by callers; this package performs no
imports of its own to keep the config <-> models dependency acyclic.
"""
