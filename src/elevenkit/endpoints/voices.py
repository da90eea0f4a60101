"""Voice library endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import Field

from ..transport import FilePart, MultipartBody, RequestBody
from .base import BaseEndpoint
from .schemas import QueryModel, ResponseModel, StatusResponse, VoiceSettings

VoiceCategory = Literal["generated", "cloned", "premade", "professional", "famous", "high_quality"]


# =============================================================================
# Responses
# =============================================================================


class VoiceSample(ResponseModel):
    sample_id: str
    file_name: str | None = None
    mime_type: str | None = None
    size_bytes: int | None = None


class Voice(ResponseModel):
    """A voice as returned by the voice endpoints."""

    voice_id: str
    name: str | None = None
    category: str | None = None
    description: str | None = None
    labels: dict[str, str] | None = None
    preview_url: str | None = None
    samples: list[VoiceSample] | None = None
    settings: VoiceSettings | None = None
    is_owner: bool | None = None
    created_at_unix: int | None = None


class VoicesPage(ResponseModel):
    voices: list[Voice]
    has_more: bool = False
    total_count: int | None = None
    next_page_token: str | None = None


class AddVoiceResponse(ResponseModel):
    voice_id: str
    requires_verification: bool = False


# =============================================================================
# Endpoints
# =============================================================================


class VoicesQuery(QueryModel):
    next_page_token: str | None = None
    page_size: int | None = Field(None, ge=1, le=100)
    search: str | None = None
    sort: Literal["created_at_unix", "name"] | None = None
    sort_direction: Literal["asc", "desc"] | None = None
    voice_type: Literal["personal", "community", "default", "workspace"] | None = None
    category: VoiceCategory | None = None
    include_total_count: bool | None = None


@dataclass
class GetVoices(BaseEndpoint[VoicesPage]):
    """List the voices available to the account, one page at a time."""

    PATH = "/v2/voices"
    response_model = VoicesPage

    query: VoicesQuery | None = None

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None


@dataclass
class GetVoice(BaseEndpoint[Voice]):
    PATH = "/v1/voices/:voice_id"
    response_model = Voice

    voice_id: str

    def path_params(self) -> dict[str, str]:
        return {"voice_id": str(self.voice_id)}


@dataclass
class GetVoiceSettings(BaseEndpoint[VoiceSettings]):
    PATH = "/v1/voices/:voice_id/settings"
    response_model = VoiceSettings

    voice_id: str

    def path_params(self) -> dict[str, str]:
        return {"voice_id": str(self.voice_id)}


@dataclass
class EditVoiceSettings(BaseEndpoint[StatusResponse]):
    METHOD = "POST"
    PATH = "/v1/voices/:voice_id/settings/edit"
    response_model = StatusResponse

    voice_id: str
    settings: VoiceSettings

    def path_params(self) -> dict[str, str]:
        return {"voice_id": str(self.voice_id)}

    def request_body(self) -> RequestBody | None:
        return self.settings.to_json_body()


@dataclass
class DeleteVoice(BaseEndpoint[StatusResponse]):
    METHOD = "DELETE"
    PATH = "/v1/voices/:voice_id"
    response_model = StatusResponse

    voice_id: str

    def path_params(self) -> dict[str, str]:
        return {"voice_id": str(self.voice_id)}


def voice_sample(path: str | Path) -> FilePart:
    """Load an audio sample from disk as an ``AddVoice`` file part."""
    path = Path(path)
    subtype = path.suffix.lstrip(".").lower() or "mpeg"
    return FilePart("files", path.name, path.read_bytes(), f"audio/{subtype}")


@dataclass
class AddVoice(BaseEndpoint[AddVoiceResponse]):
    """Clone a voice from one or more audio samples.

    Example:
        endpoint = AddVoice(
            "John Doe",
            samples=[voice_sample("take1.mp3"), voice_sample("take2.mp3")],
            labels={"accent": "british"},
        )
    """

    METHOD = "POST"
    PATH = "/v1/voices/add"
    response_model = AddVoiceResponse

    name: str
    samples: list[FilePart]
    description: str | None = None
    labels: dict[str, str] | None = None
    remove_background_noise: bool | None = None

    def __post_init__(self) -> None:
        # Without file parts httpx would send a urlencoded form
        if not self.samples:
            raise ValueError("AddVoice needs at least one voice sample")

    def request_body(self) -> RequestBody | None:
        fields: dict[str, str | list[str]] = {"name": self.name}
        if self.description is not None:
            fields["description"] = self.description
        if self.labels:
            fields["labels"] = json.dumps(self.labels)
        if self.remove_background_noise is not None:
            fields["remove_background_noise"] = str(self.remove_background_noise).lower()
        return MultipartBody(fields=fields, files=list(self.samples))
