"""Text to speech endpoints.

Three flavours share one body: complete audio (``TextToSpeech``), audio
streamed as it is generated (``TextToSpeechStream``) and audio with
per-character timing (``TextToSpeechWithTimestamps``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import Field

from ..convai.messages import decode_base64_audio
from ..transport import RequestBody
from .base import BaseEndpoint, BytesEndpoint, StreamingEndpoint
from .schemas import RequestModel, ResponseModel, SpeechQuery, VoiceSettings


class TextToSpeechBody(RequestModel):
    """Request body for every text to speech endpoint."""

    text: str = Field(..., min_length=1, description="Text to convert to speech")
    model_id: str | None = Field(None, description="Model id, e.g. eleven_multilingual_v2")
    language_code: str | None = Field(None, description="ISO 639-1 code to enforce a language")
    voice_settings: VoiceSettings | None = None
    seed: int | None = Field(None, ge=0, description="Best-effort deterministic sampling")
    previous_text: str | None = None
    next_text: str | None = None
    apply_text_normalization: Literal["auto", "on", "off"] | None = None


class Alignment(ResponseModel):
    """Character-level timing of generated audio."""

    characters: list[str]
    character_start_times_seconds: list[float]
    character_end_times_seconds: list[float]


class TextToSpeechWithTimestampsResponse(ResponseModel):
    audio_base64: str
    alignment: Alignment | None = None
    normalized_alignment: Alignment | None = None

    def audio_bytes(self) -> bytes:
        """Decode the base64 audio payload.

        Raises:
            DecodeError: If the payload is not valid base64.
        """
        return decode_base64_audio(self.audio_base64)


class _SpeechRequest:
    """Path, query and body handling common to the speech endpoints."""

    voice_id: str
    body: TextToSpeechBody
    query: SpeechQuery | None

    def path_params(self) -> dict[str, str]:
        return {"voice_id": str(self.voice_id)}

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None

    def request_body(self) -> RequestBody | None:
        return self.body.to_json_body()


@dataclass
class TextToSpeech(_SpeechRequest, BytesEndpoint):
    """Convert text to speech and return the complete audio file."""

    METHOD = "POST"
    PATH = "/v1/text-to-speech/:voice_id"

    voice_id: str
    body: TextToSpeechBody
    query: SpeechQuery | None = None


@dataclass
class TextToSpeechStream(_SpeechRequest, StreamingEndpoint):
    """Convert text to speech, yielding audio chunks as they are generated."""

    METHOD = "POST"
    PATH = "/v1/text-to-speech/:voice_id/stream"

    voice_id: str
    body: TextToSpeechBody
    query: SpeechQuery | None = None


@dataclass
class TextToSpeechWithTimestamps(
    _SpeechRequest, BaseEndpoint[TextToSpeechWithTimestampsResponse]
):
    """Convert text to speech and return base64 audio with character timings."""

    METHOD = "POST"
    PATH = "/v1/text-to-speech/:voice_id/with-timestamps"
    response_model = TextToSpeechWithTimestampsResponse

    voice_id: str
    body: TextToSpeechBody
    query: SpeechQuery | None = None
