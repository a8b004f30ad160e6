"""``AzureChatClient.ask`` against an ``httpx.MockTransport``."""
from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from gpt_client import AzureChatClient, GenerationConfig
from gpt_client.base.errors import (
    ApiError,
    ConfigError,
    ErrorCode,
    InvalidCredentialError,
    ParseError,
    TransportError,
)
from gpt_client.tests.helpers import TEST_KEY, TEST_URL, make_client


def _run(client, prompt="hi"):
    async def main():
        async with client:
            return await client.ask(prompt)

    return asyncio.run(main())


def test_ask_returns_first_choice_and_sends_expected_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})

    cfg = GenerationConfig.create(temperature=0.8, max_tokens=1000)
    assert _run(make_client(handler, config=cfg)) == "hello"

    req = seen["request"]
    assert req.method == "POST"
    assert str(req.url) == TEST_URL
    assert req.headers["api-key"] == TEST_KEY
    assert req.headers["content-type"] == "application/json"
    body = json.loads(req.content)
    assert body["messages"] == [{"role": "user", "content": "hi"}]
    assert body["temperature"] == 0.8
    assert body["max_tokens"] == 1000
    assert body["stream"] is False
    assert "stop" not in body


def test_empty_choices_raise_parse_error():
    client = make_client(lambda r: httpx.Response(200, json={"choices": []}))
    with pytest.raises(ParseError) as ei:
        _run(client)
    assert "No response choices available" in ei.value.message


def test_undecodable_body_raises_parse_error():
    client = make_client(lambda r: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(ParseError):
        _run(client)


@pytest.mark.parametrize(
    "status,code",
    [(401, ErrorCode.AUTH), (429, ErrorCode.RATE_LIMIT), (500, ErrorCode.SERVER_ERROR), (418, ErrorCode.UNKNOWN)],
)
def test_non_success_status_raises_api_error(status, code):
    client = make_client(lambda r: httpx.Response(status, text="quota exceeded"))
    with pytest.raises(ApiError) as ei:
        _run(client)
    err = ei.value
    assert err.status_code == status
    assert err.body == "quota exceeded"
    assert err.code is code
    assert f"{status} - quota exceeded" in err.message


def test_connection_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as ei:
        _run(make_client(handler))
    assert ei.value.code is ErrorCode.TRANSPORT
    assert isinstance(ei.value.raw, httpx.ConnectError)


def test_invalid_credential_rejected_before_sending():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "x"}}]})

    with pytest.raises(InvalidCredentialError):
        _run(make_client(handler, api_key="bad\nkey"))
    with pytest.raises(InvalidCredentialError):
        _run(make_client(handler, api_key="clé"))
    assert calls == []


def test_concurrent_requests_share_client():
    def handler(request):
        prompt = json.loads(request.content)["messages"][0]["content"]
        return httpx.Response(200, json={"choices": [{"message": {"content": prompt.upper()}}]})

    async def main():
        async with make_client(handler) as client:
            return await asyncio.gather(*(client.ask(p) for p in ("a", "b", "c")))

    assert asyncio.run(main()) == ["A", "B", "C"]


def test_build_requires_url_and_key():
    with pytest.raises(ConfigError) as ei:
        AzureChatClient.builder().api_key(TEST_KEY).build()
    assert "API URL is required" in ei.value.message
    with pytest.raises(ConfigError) as ei:
        AzureChatClient.builder().api_url(TEST_URL).build()
    assert "API key is required" in ei.value.message


def test_builder_defaults_config():
    async def main():
        async with AzureChatClient.builder().api_url(TEST_URL).api_key(TEST_KEY).build() as client:
            return client.config

    assert asyncio.run(main()) == GenerationConfig()


def test_from_env_reads_endpoint_and_overrides(monkeypatch):
    monkeypatch.setenv("AZUREOPENAI_API_URL", TEST_URL)
    monkeypatch.setenv("AZUREOPENAI_API_KEY", "sk-live-123")
    monkeypatch.setenv("AZUREOPENAI_TEMPERATURE", "1.5")
    seen = {}

    def handler(request):
        seen["key"] = request.headers["api-key"]
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    client = AzureChatClient.from_env({"max_tokens": 5}, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    assert client.api_url == TEST_URL
    assert client.config.temperature == 1.5
    assert client.config.max_tokens == 5
    assert _run(client) == "ok"
    assert seen["key"] == "sk-live-123"


def test_from_env_without_endpoint_is_config_error():
    with pytest.raises(ConfigError):
        AzureChatClient.from_env()


def test_unparseable_url_raises_config_error():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "x"}}]})

    with pytest.raises(ConfigError) as ei:
        _run(make_client(handler, api_url="https://example.openai.azure.com/chat\x00"))
    assert "invalid API URL" in ei.value.message
    assert calls == []
