"""Tests for ElevenLabsClient.hit: URL building, auth, bodies and error decoding."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
from conftest import make_client

from elevenkit import APIError, DecodeError, ElevenLabsClient, Endpoint, OutputFormat, TransportError
from elevenkit.endpoints import (
    CreateTranscript,
    DeleteConversation,
    GetVoice,
    SpeechQuery,
    TextToSpeech,
    TextToSpeechBody,
    TextToSpeechStream,
)


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------


async def test_text_to_speech_returns_audio_bytes():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"\x01\x02\x03")

    async with make_client(handler) as client:
        audio = await client.hit(
            TextToSpeech("voice_1", TextToSpeechBody(text="hello", model_id="model_x"))
        )

    assert audio == b"\x01\x02\x03"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/text-to-speech/voice_1"
    assert request.headers["xi-api-key"] == "sk_test"
    assert json.loads(request.content) == {"text": "hello", "model_id": "model_x"}


async def test_json_response_is_decoded_into_model():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/v1/voices/abc"
        return httpx.Response(200, json={"voice_id": "abc", "name": "Ada", "category": "premade"})

    async with make_client(handler) as client:
        voice = await client.hit(GetVoice("abc"))

    assert voice.voice_id == "abc"
    assert voice.name == "Ada"


async def test_query_parameters_are_encoded():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["output_format"] == "pcm_16000"
        assert request.url.params["enable_logging"] == "false"
        assert "optimize_streaming_latency" not in request.url.params
        return httpx.Response(200, content=b"pcm")

    query = SpeechQuery(output_format=OutputFormat.PCM_16000, enable_logging=False)
    async with make_client(handler) as client:
        assert await client.hit(TextToSpeech("v", TextToSpeechBody(text="hi"), query)) == b"pcm"


async def test_path_parameters_are_escaped():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.raw_path == b"/v1/voices/my%20voice"
        return httpx.Response(200, json={"voice_id": "my voice"})

    async with make_client(handler) as client:
        voice = await client.hit(GetVoice("my voice"))

    assert voice.voice_id == "my voice"


async def test_base_url_is_configurable():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "eu.example.test"
        return httpx.Response(200, json={"voice_id": "v"})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    async with ElevenLabsClient(
        "sk_test", base_url="https://eu.example.test/", http_client=http_client
    ) as client:
        await client.hit(GetVoice("v"))


async def test_streaming_endpoint_yields_chunks():
    payload = b"a" * 10_000

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/text-to-speech/v/stream"
        return httpx.Response(200, content=payload)

    async with make_client(handler) as client:
        stream = await client.hit(TextToSpeechStream("v", TextToSpeechBody(text="long text")))
        received = b"".join([chunk async for chunk in stream])

    assert received == payload


async def test_multipart_upload():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="model_id"' in body
        assert b"scribe_v1" in body
        assert b'name="diarize"' in body
        assert b'filename="clip.wav"' in body
        assert b"RIFFDATA" in body
        return httpx.Response(
            200,
            json={
                "language_code": "en",
                "language_probability": 0.98,
                "text": "hello there",
                "words": [{"text": "hello", "start": 0.0, "end": 0.4}],
            },
        )

    async with make_client(handler) as client:
        transcript = await client.hit(CreateTranscript(b"RIFFDATA", "clip.wav", diarize=True))

    assert transcript.text == "hello there"
    assert transcript.words[0].end == 0.4


async def test_no_content_endpoint_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(200)

    async with make_client(handler) as client:
        assert await client.hit(DeleteConversation("conv_1")) is None


async def test_custom_endpoint_without_base_class():
    """Anything implementing the Endpoint protocol can be dispatched."""

    @dataclass
    class Ping:
        METHOD = "GET"
        STREAMING = False

        def path(self) -> str:
            return "/v1/ping"

        def query_params(self) -> dict[str, Any] | None:
            return None

        def request_body(self):
            return None

        def parse_response(self, response: httpx.Response) -> str:
            return response.text

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="pong")

    endpoint = Ping()
    assert isinstance(endpoint, Endpoint)
    async with make_client(handler) as client:
        assert await client.hit(endpoint) == "pong"


# ---------------------------------------------------------------------------
# Error paths
# ---------------------------------------------------------------------------


async def test_structured_error_becomes_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={"detail": {"status": "invalid_api_key", "message": "Invalid API key"}},
        )

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.hit(GetVoice("abc"))

    error = exc_info.value
    assert error.status_code == 401
    assert error.code == "invalid_api_key"
    assert error.message == "Invalid API key"


async def test_string_detail_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Voice not found"})

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.hit(GetVoice("missing"))

    assert exc_info.value.status_code == 404
    assert exc_info.value.code is None
    assert exc_info.value.message == "Voice not found"


async def test_validation_error_keeps_details():
    detail = [{"loc": ["body", "text"], "msg": "Field required", "type": "missing"}]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"detail": detail})

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.hit(TextToSpeech("v", TextToSpeechBody(text="x")))

    assert exc_info.value.message == "Field required"
    assert exc_info.value.details == detail


async def test_unreadable_error_body_is_decode_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    async with make_client(handler) as client:
        with pytest.raises(DecodeError) as exc_info:
            await client.hit(GetVoice("abc"))

    assert exc_info.value.status_code == 502


async def test_empty_error_body_uses_reason_phrase():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.hit(GetVoice("abc"))

    assert exc_info.value.message == "Service Unavailable"


async def test_mismatched_success_body_is_decode_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    async with make_client(handler) as client:
        with pytest.raises(DecodeError):
            await client.hit(GetVoice("abc"))


async def test_streaming_error_is_decoded():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"detail": {"status": "text_too_long", "message": "Text is too long"}},
        )

    async with make_client(handler) as client:
        with pytest.raises(APIError) as exc_info:
            await client.hit(TextToSpeechStream("v", TextToSpeechBody(text="x")))

    assert exc_info.value.code == "text_too_long"


async def test_connection_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TransportError):
            await client.hit(GetVoice("abc"))


# ---------------------------------------------------------------------------
# Client sharing
# ---------------------------------------------------------------------------


async def test_clone_shares_transport():
    async with make_client(lambda request: httpx.Response(200)) as client:
        clone = client.clone()
        assert clone.transport is client.transport
        assert clone.config == client.config


async def test_with_api_key_uses_new_key_on_shared_pool():
    keys: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        keys.append(request.headers["xi-api-key"])
        return httpx.Response(200, json={"voice_id": "v"})

    async with make_client(handler) as client:
        tenant = client.with_api_key("sk_other")
        await client.hit(GetVoice("v"))
        await tenant.hit(GetVoice("v"))

        assert tenant.transport is client.transport
        assert tenant.api_key == "sk_other"

    assert keys == ["sk_test", "sk_other"]
    assert client.is_closed
