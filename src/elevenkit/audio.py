"""Streaming audio bridge between responses, sessions and sinks.

``stream_audio`` feeds any async byte iterable (a ``TextToSpeechStream``
response, or ``iter_audio_frames`` over a session) into an ``AudioSink``
chunk by chunk, so playback can start before generation finishes.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator
from pathlib import Path
from typing import Any

from .convai.events import SessionEvent
from .convai.messages import Audio
from .protocols import AudioSink

logger = logging.getLogger(__name__)


async def stream_audio(chunks: AsyncIterable[bytes], sink: AudioSink) -> int:
    """Push every chunk to the sink as it arrives.

    Args:
        chunks: Audio bytes, e.g. the result of ``hit(TextToSpeechStream(...))``.
        sink: Receiver of the chunks.

    Returns:
        Total number of bytes pushed.

    Raises:
        DecodeError: If a chunk could not be decoded. Chunks already pushed
            stay pushed.
        TransportError: If the underlying stream was interrupted.
    """
    total = 0
    async for chunk in chunks:
        sink.push(chunk)
        total += len(chunk)
    logger.debug(f"[AUDIO] Streamed {total} bytes to {type(sink).__name__}")
    return total


async def iter_audio_frames(events: AsyncIterable[SessionEvent]) -> AsyncIterator[bytes]:
    """Yield the decoded audio of each ``Audio`` event, skipping other events."""
    async for event in events:
        if isinstance(event, Audio):
            yield event.audio_bytes()


def save(path: str | Path, data: bytes) -> Path:
    """Write audio bytes to a file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


class BufferSink:
    """Sink that accumulates audio in memory."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.chunks = 0

    def push(self, chunk: bytes) -> None:
        self._buffer.extend(chunk)
        self.chunks += 1

    @property
    def data(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class FileSink:
    """Sink that appends audio to a file.

    Example:
        with FileSink("out.mp3") as sink:
            await stream_audio(await client.hit(TextToSpeechStream(...)), sink)
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("wb")

    def push(self, chunk: bytes) -> None:
        self._file.write(chunk)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
