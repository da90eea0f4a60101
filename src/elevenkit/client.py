"""ElevenLabs API client and the generic endpoint dispatcher.

``ElevenLabsClient.hit`` is the single place REST I/O happens: endpoint values
only describe a request and decode a response.

Example:
    async with ElevenLabsClient("sk_...") as client:
        audio = await client.hit(TextToSpeech(voice_id, TextToSpeechBody(text="hi")))
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from typing import Any, TypeVar

import httpx
from dotenv import load_dotenv

from .config import API_KEY_ENV, DEFAULT_BASE_URL, DEFAULT_WS_BASE_URL, ClientConfig
from .errors import APIError, DecodeError, TransportError
from .protocols import Endpoint
from .transport import Transport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")

API_KEY_HEADER = "xi-api-key"


def parse_error_response(response: httpx.Response) -> APIError:
    """Decode a non-success response into an ``APIError``.

    The provider reports errors as ``{"detail": {"status": ..., "message": ...}}``;
    validation failures carry a list under ``detail`` and some routes send a
    bare string.

    Raises:
        DecodeError: If the body is present but is not JSON.
    """
    status_code = response.status_code
    raw = response.content
    if not raw.strip():
        return APIError(status_code, response.reason_phrase or "Empty error body")

    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise DecodeError(
            f"Unreadable error body for HTTP {status_code}",
            payload=raw[:1000],
            status_code=status_code,
        ) from e

    if not isinstance(payload, dict):
        return APIError(status_code, str(payload), details=payload)

    detail = payload.get("detail", payload)

    if isinstance(detail, str):
        return APIError(status_code, detail)

    if isinstance(detail, list):
        messages = [
            str(item.get("msg", item)) if isinstance(item, dict) else str(item)
            for item in detail
        ]
        return APIError(
            status_code,
            "; ".join(messages) or "Validation error",
            details=detail,
        )

    if isinstance(detail, dict):
        code = detail.get("status") or detail.get("code")
        message = detail.get("message") or response.reason_phrase or "Unknown error"
        extra = {k: v for k, v in detail.items() if k not in ("status", "code", "message")}
        return APIError(
            status_code,
            str(message),
            code=str(code) if code is not None else None,
            details=extra or None,
        )

    return APIError(status_code, str(detail), details=payload)


class ElevenLabsClient:
    """Async client for the ElevenLabs HTTP API.

    The client is read-only after construction. ``clone`` and ``with_api_key``
    return new clients sharing the same connection pool; closing any of them
    closes the pool for all.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        ws_base_url: str = DEFAULT_WS_BASE_URL,
        timeout: float | None = 120.0,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Falls back to the ``ELEVENLABS_API_KEY``
                environment variable.
            base_url: REST base URL.
            ws_base_url: WebSocket base URL for conversational sessions.
            timeout: HTTP timeout in seconds.
            config: Complete configuration; overrides the arguments above.
            http_client: Custom httpx client (e.g. with a mock transport).
            transport: Existing transport to share.

        Raises:
            ConfigurationError: If no API key is available.
        """
        if config is None:
            config = ClientConfig(
                api_key=api_key if api_key is not None else os.getenv(API_KEY_ENV, ""),
                base_url=base_url,
                ws_base_url=ws_base_url,
                timeout=timeout,
            )
        self._config = config
        self._transport = transport or Transport(timeout=config.timeout, http_client=http_client)

    @classmethod
    def from_env(
        cls,
        dotenv_path: str | os.PathLike[str] | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> ElevenLabsClient:
        """Build a client from environment variables, loading a ``.env`` first."""
        load_dotenv(dotenv_path)
        return cls(config=ClientConfig.from_env(), http_client=http_client)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def ws_base_url(self) -> str:
        return self._config.ws_base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    def clone(self) -> ElevenLabsClient:
        """Return a client with the same settings sharing this client's pool."""
        return type(self)(config=self._config, transport=self._transport)

    def with_api_key(self, api_key: str) -> ElevenLabsClient:
        """Return a client for another API key sharing this client's pool."""
        config = dataclasses.replace(self._config, api_key=api_key)
        return type(self)(config=config, transport=self._transport)

    async def hit(self, endpoint: Endpoint[ResponseT]) -> ResponseT:
        """Execute an endpoint and decode its response.

        Args:
            endpoint: Any value implementing the ``Endpoint`` protocol.

        Returns:
            The endpoint's typed response. Streaming endpoints return an async
            byte iterator that must be consumed (or closed) by the caller.

        Raises:
            TransportError: If the request could not be completed.
            APIError: If the API answered with a non-success status.
            DecodeError: If a body did not match the expected shape.
        """
        path = endpoint.path()
        streaming = bool(getattr(endpoint, "STREAMING", False))
        url = f"{self._config.base_url}{path}"

        logger.debug(f"[HIT] {endpoint.METHOD} {path} ({type(endpoint).__name__})")
        response = await self._transport.send(
            endpoint.METHOD,
            url,
            headers={API_KEY_HEADER: self._config.api_key},
            params=endpoint.query_params(),
            body=endpoint.request_body(),
            stream=streaming,
        )

        if not response.is_success:
            if streaming:
                await self._read_and_close(response)
            error = parse_error_response(response)
            logger.debug(f"[HIT] {endpoint.METHOD} {path} -> {error}")
            raise error

        if not streaming:
            return endpoint.parse_response(response)

        try:
            return endpoint.parse_response(response)
        except BaseException:
            await response.aclose()
            raise

    @staticmethod
    async def _read_and_close(response: httpx.Response) -> None:
        """Load a streamed error body so it can be decoded."""
        try:
            await response.aread()
        except httpx.TransportError as e:
            raise TransportError(
                f"Failed reading error body (HTTP {response.status_code}): {e}"
            ) from e
        finally:
            await response.aclose()

    @property
    def is_closed(self) -> bool:
        return self._transport.is_closed

    async def aclose(self) -> None:
        """Close the shared connection pool."""
        await self._transport.aclose()

    async def __aenter__(self) -> ElevenLabsClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
