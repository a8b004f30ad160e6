"""Interactive chat terminal.

Purpose
-------
A small read-eval-print loop over ``AzureChatClient``: every line is sent as
an independent single-message exchange and the answer is printed either as a
whole (``ask``) or fragment by fragment as it arrives (``ask_stream``).

Commands
--------
- ``help``: show available commands
- ``status``: print endpoint and current mode
- ``stream [on|off]``: set or toggle streaming mode
- ``exit`` / ``quit``: leave the terminal

Anything else is sent as a prompt. Errors are printed to stderr and the loop
continues. Input is read on a worker thread so the event loop (and the
client's connection pool) stays alive for the whole session.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Callable, Optional

import httpx

from ...azure import AzureChatClient
from ...base.errors import GptClientError
from ...base.logging import configure_logger, get_logger, log_event, suppress_console_logs
from ...config.defaults import CLI_EXIT_COMMANDS
from ...mock import MOCK_API_KEY, MOCK_API_URL, build_mock_transport

_logger = get_logger("gpt_client.cli")

HELP_TEXT = (
    "Commands:\n"
    "  help               show this help\n"
    "  status             show endpoint and mode\n"
    "  stream [on|off]    set or toggle streaming mode\n"
    "  exit | quit        leave\n"
    "Anything else is sent as a prompt."
)


def _readline(prompt: str) -> str:
    """Read one line from stdin; return ``exit`` on EOF."""
    try:
        return input(prompt)
    except EOFError:
        return "exit"


class ChatSession:
    """Holds the client and the current response mode."""

    def __init__(
        self,
        client: AzureChatClient,
        *,
        stream: bool = True,
        reader: Callable[[str], str] = _readline,
    ) -> None:
        self.client = client
        self.stream = stream
        self._reader = reader

    def status(self) -> None:
        print(f"endpoint : {self.client.api_url}")
        print(f"stream   : {'on' if self.stream else 'off'}")
        print(f"config   : temperature={self.client.config.temperature} max_tokens={self.client.config.max_tokens}")

    def set_stream(self, arg: Optional[str]) -> None:
        if arg is None:
            self.stream = not self.stream
        elif arg.lower() in ("on", "true", "1"):
            self.stream = True
        elif arg.lower() in ("off", "false", "0"):
            self.stream = False
        else:
            print("usage: stream [on|off]")
            return
        print(f"stream mode {'on' if self.stream else 'off'}")

    async def send(self, prompt: str) -> bool:
        """Send one prompt and print the answer; return False on failure."""
        try:
            if self.stream:
                return await self._send_stream(prompt)
            answer = await self.client.ask(prompt)
        except GptClientError as e:
            print(f"Error: {e}\n", file=sys.stderr)
            return False
        print(f"\nGPT: {answer}\n")
        return True

    async def _send_stream(self, prompt: str) -> bool:
        ok = True
        print("\nGPT: ", end="", flush=True)
        with suppress_console_logs():
            async with await self.client.ask_stream(prompt) as stream:
                async for frag in stream:
                    if frag.is_error():
                        ok = False
                        print(f"\nError: {frag.error}", file=sys.stderr)
                        continue
                    print(frag.text, end="", flush=True)
        print("\n")
        return ok

    async def run(self) -> int:
        print("Welcome to GPT Client!")
        print("Type 'exit' to quit the program.\n")
        while True:
            line = (await asyncio.to_thread(self._reader, "You: ")).strip()
            if not line:
                continue
            cmd, _, rest = line.partition(" ")
            lowered = cmd.lower()
            if lowered in CLI_EXIT_COMMANDS and not rest:
                print("Goodbye!")
                return 0
            if lowered == "help" and not rest:
                print(HELP_TEXT)
            elif lowered == "status" and not rest:
                self.status()
            elif lowered == "stream" and len(rest.split()) <= 1:
                self.set_stream(rest.strip() or None)
            else:
                await self.send(line)


def _build_client(args: argparse.Namespace) -> AzureChatClient:
    overrides = {"temperature": args.temperature, "max_tokens": args.max_tokens}
    if not args.mock:
        return AzureChatClient.from_env(overrides)
    overrides |= {"api_url": MOCK_API_URL, "api_key": MOCK_API_KEY}
    return AzureChatClient.from_env(overrides, http_client=httpx.AsyncClient(transport=build_mock_transport()))


async def _run(args: argparse.Namespace, reader: Callable[[str], str]) -> int:
    try:
        client = _build_client(args)
    except GptClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set AZUREOPENAI_API_URL and AZUREOPENAI_API_KEY (or use --mock).", file=sys.stderr)
        return 2
    async with client:
        session = ChatSession(client, stream=args.stream, reader=reader)
        if args.prompt:
            return 0 if await session.send(args.prompt) else 1
        return await session.run()


def handle_shell(args: argparse.Namespace, reader: Callable[[str], str] = _readline) -> int:
    """Configure logging and run the session to completion."""
    configure_logger(level=args.log_level, file_path=args.log_file)
    if args.mock or _env_flag_mock():
        args.mock = True
    log_event(_logger, "cli.start", mock=args.mock, stream=args.stream)
    return asyncio.run(_run(args, reader))


def _env_flag_mock() -> bool:
    return os.getenv("GPT_CLIENT_USE_MOCKS", "").strip().lower() in ("1", "true", "yes")


__all__ = ["ChatSession", "HELP_TEXT", "handle_shell"]
