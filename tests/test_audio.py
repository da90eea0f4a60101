"""Tests for the audio streaming helpers."""

from __future__ import annotations

import json

import httpx
import pytest
from conftest import agent_response_frame, make_client

from elevenkit import BufferSink, DecodeError, FileSink, iter_audio_frames, save, stream_audio
from elevenkit.convai import parse_server_message
from elevenkit.endpoints import TextToSpeechBody, TextToSpeechStream


def _audio_frame(audio_base64: str, event_id: int) -> str:
    return json.dumps(
        {"type": "audio", "audio_event": {"audio_base_64": audio_base64, "event_id": event_id}}
    )


async def _chunks(*chunks: bytes):
    for chunk in chunks:
        yield chunk


async def _events(*frames: str):
    for frame in frames:
        yield parse_server_message(frame)


async def test_stream_audio_pushes_every_chunk():
    sink = BufferSink()

    total = await stream_audio(_chunks(b"ab", b"cde", b"f"), sink)

    assert total == 6
    assert sink.data == b"abcdef"
    assert sink.chunks == 3
    assert len(sink) == 6


async def test_stream_tts_response_into_sink():
    payload = b"\xff\xfb" * 5_000

    async with make_client(lambda request: httpx.Response(200, content=payload)) as client:
        stream = await client.hit(TextToSpeechStream("v", TextToSpeechBody(text="hello")))
        sink = BufferSink()
        total = await stream_audio(stream, sink)

    assert total == len(payload)
    assert sink.data == payload


async def test_audio_frames_skip_other_events():
    events = _events(
        _audio_frame("AAE=", 1),
        json.dumps(agent_response_frame("hi")),
        _audio_frame("AgM=", 2),
    )

    frames = [frame async for frame in iter_audio_frames(events)]

    assert frames == [b"\x00\x01", b"\x02\x03"]


async def test_invalid_audio_stops_after_earlier_chunks():
    sink = BufferSink()
    events = _events(_audio_frame("AAE=", 1), _audio_frame("!!", 2), _audio_frame("AgM=", 3))

    with pytest.raises(DecodeError):
        await stream_audio(iter_audio_frames(events), sink)

    assert sink.data == b"\x00\x01"


async def test_file_sink_writes_chunks(tmp_path):
    path = tmp_path / "out" / "speech.mp3"

    with FileSink(path) as sink:
        await stream_audio(_chunks(b"ID3", b"\x00\x01"), sink)

    assert path.read_bytes() == b"ID3\x00\x01"


def test_save_creates_parent_directories(tmp_path):
    path = save(tmp_path / "nested" / "dir" / "clip.wav", b"RIFF")

    assert path.read_bytes() == b"RIFF"
