"""CLI entrypoint and interactive session driven by a scripted reader."""
from __future__ import annotations

import argparse
import asyncio

import httpx

from gpt_client.service.cli import main
from gpt_client.service.cli.cli_parser import build_parser
from gpt_client.service.cli.cli_shell import HELP_TEXT, ChatSession, handle_shell
from gpt_client.tests.helpers import make_client


def _script(lines):
    it = iter(lines)
    return lambda _prompt: next(it, "exit")


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.stream is True
    assert args.mock is False
    assert args.prompt is None
    assert build_parser().parse_args(["--no-stream"]).stream is False


def test_single_prompt_complete_mode(capsys):
    assert main(["--mock", "--prompt", "hi", "--no-stream"]) == 0
    assert "GPT: echo: hi" in capsys.readouterr().out


def test_single_prompt_stream_mode(capsys):
    assert main(["--mock", "--prompt", "hi there"]) == 0
    assert "GPT: echo: hi there" in capsys.readouterr().out


def test_missing_configuration_exit_code(capsys):
    assert main(["--prompt", "hi"]) == 2
    assert "API URL is required" in capsys.readouterr().err


def test_env_flag_enables_mock(monkeypatch, capsys):
    monkeypatch.setenv("GPT_CLIENT_USE_MOCKS", "1")
    assert main(["--prompt", "yo", "--no-stream"]) == 0
    assert "echo: yo" in capsys.readouterr().out


def test_interactive_session(capsys):
    args = build_parser().parse_args(["--mock"])
    reader = _script(["help", "status", "", "stream off", "hello there", "stream", "second one", "quit"])
    assert handle_shell(args, reader=reader) == 0
    out = capsys.readouterr().out
    assert "Welcome to GPT Client!" in out
    assert HELP_TEXT in out
    assert "stream   : on" in out
    assert "stream mode off" in out
    assert "GPT: echo: hello there" in out
    assert "stream mode on" in out
    assert "GPT: echo: second one" in out
    assert out.rstrip().endswith("Goodbye!")


def test_end_of_input_exits():
    args = argparse.Namespace(
        prompt=None, stream=False, mock=True, log_level="WARNING", log_file=None, temperature=None, max_tokens=None
    )
    assert handle_shell(args, reader=_script([])) == 0


def test_session_reports_errors_and_continues(capsys):
    async def run():
        async with make_client(lambda r: httpx.Response(503, text="busy")) as client:
            session = ChatSession(client, stream=False)
            return await session.send("a"), await ChatSession(client, stream=True).send("b")

    assert asyncio.run(run()) == (False, False)
    err = capsys.readouterr().err
    assert err.count("API response error: 503 - busy") == 2
