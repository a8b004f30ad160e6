"""Azure-hosted chat-completion client.

Performs one request/response cycle against a fixed endpoint, either to
completion (``ask``) or as an incremental stream (``ask_stream``).

External dependencies:
    - ``httpx`` (``AsyncClient``) for pooled HTTP/1.1 connections.
    - ``pydantic`` models (``CompletionResponse``) for inbound payloads.

Error semantics:
    - ``build()`` raises ``ConfigError`` when the URL or credential is missing;
      a URL httpx cannot parse raises ``ConfigError`` on the first request.
    - ``ask`` raises ``TransportError``, ``InvalidCredentialError``,
      ``ApiError`` (non-2xx) or ``ParseError``.
    - ``ask_stream`` raises the same errors for the start phase; afterwards
      failures are delivered as error fragments on the returned stream.
    - No retries anywhere. Timeouts come from ``get_timeout_config``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

import httpx

from ..base.errors import ApiError, ConfigError, ParseError, TransportError, classify_exception, code_for_status
from ..base.http import create_async_client
from ..base.logging import LogContext, get_logger, log_event, mask_secret, normalized_log_event
from ..base.models import CompletionResponse, GenerationConfig
from ..base.streaming import ChatStream, StreamChannel, run_decoder
from ..config import generation_config_from, get_client_config
from .helpers import AzureRequestMixin

_logger = get_logger("gpt_client.azure")


class AzureChatClient(AzureRequestMixin):
    """Client for one OpenAI-compatible chat-completions deployment.

    Instances are created through :meth:`builder` or :meth:`from_env`. The
    underlying ``httpx.AsyncClient`` is shared by concurrent requests and
    released by :meth:`aclose` (or ``async with``).
    """

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str,
        config: GenerationConfig,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._config = config
        self._http = http_client

    @staticmethod
    def builder() -> "AzureChatClientBuilder":
        return AzureChatClientBuilder()

    @classmethod
    def from_env(
        cls,
        overrides: Optional[Dict[str, Any]] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "AzureChatClient":
        """Build from ``AZUREOPENAI_*`` variables (and ``.env``) plus overrides."""
        cfg = get_client_config(overrides)
        builder = cls.builder().config(generation_config_from(cfg))
        if cfg.get("api_url"):
            builder.api_url(cfg["api_url"])
        if cfg.get("api_key"):
            builder.api_key(cfg["api_key"])
        if http_client is not None:
            builder.http_client(http_client)
        return builder.build()

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def config(self) -> GenerationConfig:
        return self._config

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AzureChatClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _new_context(self, *, stream: bool) -> LogContext:
        return LogContext(endpoint=self._api_url, request_id=uuid.uuid4().hex[:12], stream=stream)

    async def ask(self, message: str) -> str:
        """Send ``message`` and return the first choice's full content."""
        ctx = self._new_context(stream=False)
        headers = self._build_headers(stream=False)
        payload = self._build_payload(message, stream=False)
        normalized_log_event(_logger, "chat.start", ctx, phase="start", emitted=None, message_chars=len(message))
        try:
            resp = await self._http.post(self._api_url, json=payload, headers=headers)
        except httpx.InvalidURL as e:
            raise self._url_error(e, ctx) from e
        except httpx.HTTPError as e:
            raise self._transport_error(e, ctx) from e

        if not resp.is_success:
            raise self._api_error(resp.status_code, resp.text, ctx)

        try:
            data = CompletionResponse.parse_json(resp.content)
            content = data.first_message_content()
        except ParseError as e:
            normalized_log_event(
                _logger, "chat.error", ctx, phase="parse", error_code=e.code.value, emitted=False, detail=e.detail
            )
            raise
        ctx.response_id = data.id
        normalized_log_event(_logger, "chat.end", ctx, phase="finalize", emitted=True, chars=len(content))
        return content

    async def ask_stream(self, message: str) -> ChatStream:
        """Start a streamed completion and return its consumer handle.

        Returns as soon as the response headers arrive; the body is decoded by
        an independent task feeding a bounded channel.
        """
        ctx = self._new_context(stream=True)
        headers = self._build_headers(stream=True)
        payload = self._build_payload(message, stream=True)
        normalized_log_event(_logger, "stream.start", ctx, phase="start", emitted=None, message_chars=len(message))
        try:
            request = self._http.build_request("POST", self._api_url, json=payload, headers=headers)
            resp = await self._http.send(request, stream=True)
        except httpx.InvalidURL as e:
            raise self._url_error(e, ctx) from e
        except httpx.HTTPError as e:
            raise self._transport_error(e, ctx) from e

        if not resp.is_success:
            try:
                await resp.aread()
                body = resp.text
            except httpx.HTTPError:
                body = "Unknown error"
            finally:
                await resp.aclose()
            raise self._api_error(resp.status_code, body, ctx)

        channel: StreamChannel = StreamChannel()
        task = asyncio.create_task(run_decoder(resp.aiter_bytes(), channel, ctx=ctx, on_close=resp.aclose))
        return ChatStream(channel, task)

    def _transport_error(self, exc: Exception, ctx: LogContext) -> TransportError:
        err = TransportError(str(exc) or type(exc).__name__, raw=exc, code=classify_exception(exc))
        normalized_log_event(_logger, "chat.error", ctx, phase="send", error_code=err.code.value, emitted=False)
        return err

    def _url_error(self, exc: httpx.InvalidURL, ctx: LogContext) -> ConfigError:
        err = ConfigError(f"invalid API URL: {exc}")
        normalized_log_event(_logger, "chat.error", ctx, phase="send", error_code=err.code.value, emitted=False)
        return err

    def _api_error(self, status: int, body: str, ctx: LogContext) -> ApiError:
        err = ApiError(status, body, code=code_for_status(status))
        normalized_log_event(
            _logger, "chat.error", ctx, phase="status", error_code=err.code.value, emitted=False, status=status
        )
        return err


class AzureChatClientBuilder:
    """Collects endpoint, credential and config; ``build`` validates."""

    def __init__(self) -> None:
        self._api_url: Optional[str] = None
        self._api_key: Optional[str] = None
        self._config: Optional[GenerationConfig] = None
        self._http_client: Optional[httpx.AsyncClient] = None

    def api_url(self, url: str) -> "AzureChatClientBuilder":
        log_event(_logger, "builder.api_url", level=logging.DEBUG, api_url=url)
        self._api_url = url
        return self

    def api_key(self, key: str) -> "AzureChatClientBuilder":
        log_event(_logger, "builder.api_key", level=logging.DEBUG, api_key=mask_secret(key))
        self._api_key = key
        return self

    def config(self, config: GenerationConfig) -> "AzureChatClientBuilder":
        self._config = config
        return self

    def http_client(self, client: httpx.AsyncClient) -> "AzureChatClientBuilder":
        """Use a caller-provided client (custom transport, proxies, tests)."""
        self._http_client = client
        return self

    def build(self) -> AzureChatClient:
        if not self._api_url:
            raise ConfigError("API URL is required")
        if not self._api_key:
            raise ConfigError("API key is required")
        return AzureChatClient(
            api_url=self._api_url,
            api_key=self._api_key,
            config=self._config or GenerationConfig(),
            http_client=self._http_client or create_async_client(),
        )


__all__ = ["AzureChatClient", "AzureChatClientBuilder"]
