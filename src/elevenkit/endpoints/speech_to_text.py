"""Speech to text endpoint (multipart upload)."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from ..constants import SpeechToTextModel
from ..transport import FilePart, MultipartBody, RequestBody
from .base import BaseEndpoint
from .schemas import QueryModel, ResponseModel


class TranscriptQuery(QueryModel):
    enable_logging: bool | None = None


class Character(ResponseModel):
    text: str
    start: float | None = None
    end: float | None = None


class Word(ResponseModel):
    text: str
    type: str | None = None
    start: float | None = None
    end: float | None = None
    speaker_id: str | None = None
    characters: list[Character] | None = None


class AdditionalFormatResult(ResponseModel):
    requested_format: str
    file_extension: str
    content_type: str
    content: str


class TranscriptResponse(ResponseModel):
    language_code: str
    language_probability: float
    text: str
    words: list[Word] = []
    additional_formats: list[AdditionalFormatResult] | None = None


@dataclass
class CreateTranscript(BaseEndpoint[TranscriptResponse]):
    """Transcribe an audio or video file.

    Example:
        audio = Path("meeting.mp3").read_bytes()
        transcript = await client.hit(CreateTranscript(audio, "meeting.mp3", diarize=True))
    """

    METHOD = "POST"
    PATH = "/v1/speech-to-text"
    response_model = TranscriptResponse

    file: bytes
    filename: str = "audio"
    model_id: str = SpeechToTextModel.SCRIBE_V1.value
    language_code: str | None = None
    tag_audio_events: bool | None = None
    num_speakers: int | None = None
    timestamps_granularity: Literal["word", "character", "none"] | None = None
    diarize: bool | None = None
    content_type: str | None = None
    query: TranscriptQuery | None = None

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> CreateTranscript:
        """Build a request from a file on disk."""
        path = Path(path)
        return cls(file=path.read_bytes(), filename=path.name, **kwargs)

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None

    def request_body(self) -> RequestBody | None:
        options = {
            "model_id": str(self.model_id),
            "language_code": self.language_code,
            "tag_audio_events": self.tag_audio_events,
            "num_speakers": self.num_speakers,
            "timestamps_granularity": self.timestamps_granularity,
            "diarize": self.diarize,
        }
        fields = {
            key: str(value).lower() if isinstance(value, bool) else str(value)
            for key, value in options.items()
            if value is not None
        }
        content_type = (
            self.content_type
            or mimetypes.guess_type(self.filename)[0]
            or "application/octet-stream"
        )
        return MultipartBody(
            fields=fields,
            files=[FilePart("file", self.filename, self.file, content_type)],
        )
