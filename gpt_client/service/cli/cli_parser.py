"""Argument parser for the chat CLI.

Kept separate from the shell so parsing can be unit tested without any
terminal interaction.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_DEFAULT_STREAM


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser.

    Flags
    -----
    --prompt TEXT        send one prompt and exit instead of the interactive loop
    --stream/--no-stream initial response mode (streaming by default)
    --mock               answer locally through the offline mock transport
    --log-level LEVEL    console/file logging level (e.g. DEBUG, WARNING)
    --log-file PATH      additionally write JSON logs to PATH
    """
    p = argparse.ArgumentParser(
        prog="gpt-client",
        description="Interactive client for an Azure-hosted chat-completion deployment.",
    )
    p.add_argument("--prompt", help="send a single prompt and exit")
    p.add_argument(
        "--stream",
        dest="stream",
        action=argparse.BooleanOptionalAction,
        default=CLI_DEFAULT_STREAM,
        help="print fragments as they arrive (default: on)",
    )
    p.add_argument("--mock", action="store_true", help="use the offline mock transport")
    p.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    p.add_argument("--log-file", default=None, help="write JSON logs to this file")
    p.add_argument("--temperature", type=float, default=None)
    p.add_argument("--max-tokens", type=int, default=None)
    return p


__all__ = ["build_parser"]
