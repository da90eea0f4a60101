"""Shared fixtures: a mocked HTTP layer and an in-memory WebSocket."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from websockets.exceptions import ConnectionClosedError as WsConnectionClosedError
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close

from elevenkit import ElevenLabsClient

API_KEY = "sk_test"


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: str = API_KEY,
) -> ElevenLabsClient:
    """Client whose requests are answered by ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ElevenLabsClient(api_key, http_client=http_client)


def _not_found(request: httpx.Request) -> httpx.Response:
    return httpx.Response(404, json={"detail": "Not found"})


@pytest.fixture
async def client():
    """Client for tests that never reach the REST API."""
    client = make_client(_not_found)
    yield client
    await client.aclose()


# ---------------------------------------------------------------------------
# WebSocket
# ---------------------------------------------------------------------------

_DROP = object()


class FakeConnection:
    """In-memory WebSocket driven by the test.

    Frames queued with ``feed`` are returned by ``recv`` in order; ``feed_close``
    queues a close frame, ``feed_drop`` a connection lost without one.
    """

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed_with: tuple[int, str] | None = None
        self._incoming: asyncio.Queue[Any] = asyncio.Queue()

    def feed(self, frame: dict[str, Any] | str) -> None:
        self._incoming.put_nowait(frame if isinstance(frame, str) else json.dumps(frame))

    def feed_close(self, code: int = 1000, reason: str = "") -> None:
        self._incoming.put_nowait(Close(code, reason))

    def feed_drop(self) -> None:
        self._incoming.put_nowait(_DROP)

    def sent_json(self) -> list[dict[str, Any]]:
        return [json.loads(frame) for frame in self.sent]

    async def send(self, message: str) -> None:
        if self.closed_with is not None:
            raise ConnectionClosedOK(Close(*self.closed_with), None)
        self.sent.append(message)

    async def recv(self) -> str:
        item = await self._incoming.get()
        if item is _DROP:
            raise WsConnectionClosedError(None, None)
        if isinstance(item, Close):
            if item.code in (1000, 1001):
                raise ConnectionClosedOK(item, None)
            raise WsConnectionClosedError(item, None)
        return item

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self.closed_with is None:
            self.closed_with = (code, reason)
            self._incoming.put_nowait(Close(code, reason))


class FakeConnector:
    """``connect`` factory handing out one FakeConnection and recording URLs."""

    def __init__(self, connection: FakeConnection) -> None:
        self.connection = connection
        self.urls: list[str] = []

    async def __call__(self, url: str) -> FakeConnection:
        self.urls.append(url)
        return self.connection


def metadata_frame(conversation_id: str = "conv_1") -> dict[str, Any]:
    return {
        "type": "conversation_initiation_metadata",
        "conversation_initiation_metadata_event": {
            "conversation_id": conversation_id,
            "agent_output_audio_format": "pcm_16000",
            "user_input_audio_format": "pcm_16000",
        },
    }


def agent_response_frame(text: str) -> dict[str, Any]:
    return {"type": "agent_response", "agent_response_event": {"agent_response": text}}


def tool_call_frame(tool_call_id: str, name: str, parameters: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "client_tool_call",
        "client_tool_call": {
            "tool_name": name,
            "tool_call_id": tool_call_id,
            "parameters": parameters,
        },
    }


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def connector(connection: FakeConnection) -> FakeConnector:
    return FakeConnector(connection)
