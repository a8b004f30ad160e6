"""Structured logging: JSON events, normalized keys, masking, file handler."""
from __future__ import annotations

import asyncio
import json
import logging

import httpx

from gpt_client.base.log_support import JsonFormatter, LogContext
from gpt_client.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    get_logger,
    log_event,
    mask_secret,
    normalized_log_event,
    suppress_console_logs,
)
from gpt_client.tests.helpers import TEST_KEY, make_client


class _Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events = []

    def emit(self, record: logging.LogRecord) -> None:
        self.events.append(json.loads(record.getMessage()))


def _attach(monkeypatch, level="DEBUG"):
    monkeypatch.setenv("GPT_CLIENT_LOG_LEVEL", level)
    base = get_logger()
    cap = _Capture()
    base.addHandler(cap)
    return base, cap


def test_log_event_drops_none_fields(monkeypatch):
    base, cap = _attach(monkeypatch)
    try:
        ctx = LogContext(endpoint="https://e", request_id="r1", stream=False)
        log_event(get_logger("gpt_client.test"), "unit.event", ctx, kept=1, dropped=None)
    finally:
        base.removeHandler(cap)
    (event,) = cap.events
    assert event == {"event": "unit.event", "endpoint": "https://e", "request_id": "r1", "stream": False, "kept": 1}


def test_normalized_event_has_required_keys(monkeypatch):
    base, cap = _attach(monkeypatch)
    try:
        normalized_log_event(get_logger("gpt_client.test"), "unit.norm", phase="decode", error_code="parse", emitted=False)
    finally:
        base.removeHandler(cap)
    (event,) = cap.events
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event
    assert event["phase"] == "decode"


def test_client_request_logs_start_and_end_without_secret(monkeypatch):
    base, cap = _attach(monkeypatch)
    client = make_client(lambda r: httpx.Response(200, json={"id": "cmpl-7", "choices": [{"message": {"content": "ok"}}]}))

    async def main():
        async with client:
            return await client.ask("hi")

    try:
        assert asyncio.run(main()) == "ok"
    finally:
        base.removeHandler(cap)
    names = [e["event"] for e in cap.events]
    assert "chat.start" in names
    end = next(e for e in cap.events if e["event"] == "chat.end")
    assert end["response_id"] == "cmpl-7"
    assert end["emitted"] is True
    assert TEST_KEY not in json.dumps(cap.events)


def test_mask_secret():
    assert mask_secret("abcd") == "****"
    assert mask_secret(None) == ""


def test_json_formatter_hoists_event_keys():
    record = logging.LogRecord("gpt_client.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e"
    assert out["n"] == 2
    assert out["level"] == "INFO"
    assert "msg" not in out


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "client.log"
    logger = configure_logger(level="INFO", file_path=str(path))
    try:
        log_event(get_logger("gpt_client.test"), "file.event", value=3)
        for h in logger.handlers:
            h.flush()
        line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "file.event"
    finally:
        configure_logger(file_path=None)
    handlers = logging.getLogger(BASE_LOGGER_NAME).handlers
    assert not any(getattr(h, "_gpt_client_file_handler", False) for h in handlers)


def test_suppress_console_logs_restores_levels():
    base = get_logger()
    console = [h for h in base.handlers if getattr(h, "_gpt_client_console_handler", False)]
    before = [h.level for h in console]
    assert console
    with suppress_console_logs():
        assert all(h.level > logging.CRITICAL for h in console)
    assert [h.level for h in console] == before
