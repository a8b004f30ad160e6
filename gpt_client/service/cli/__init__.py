"""Chat CLI (package entrypoint).

Wires argument parsing to the interactive shell. Performs no client logic
directly.
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_parser import build_parser
from .cli_shell import handle_shell


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    return handle_shell(args)


__all__ = ["main"]
