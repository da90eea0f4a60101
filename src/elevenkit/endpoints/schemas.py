"""Pydantic models shared by the REST endpoints.

Response models accept unknown fields so new provider fields survive a round
trip. Request bodies drop unset fields on serialization.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..constants import OutputFormat
from ..transport import JsonBody

AccessLevel = Literal["admin", "editor", "viewer"]


class ResponseModel(BaseModel):
    """Base for decoded API responses."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())


class RequestModel(BaseModel):
    """Base for JSON request bodies."""

    model_config = ConfigDict(protected_namespaces=())

    def to_json_body(self) -> JsonBody:
        return JsonBody(self.model_dump(mode="json", exclude_none=True))


class StatusResponse(ResponseModel):
    """Generic acknowledgement, e.g. ``{"status": "ok"}``."""

    status: str


# =============================================================================
# Query parameters
# =============================================================================


class QueryModel(BaseModel):
    """Base for query parameter sets; unset values are omitted."""

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class SpeechQuery(QueryModel):
    """Query parameters accepted by the speech generation endpoints."""

    output_format: OutputFormat | None = Field(
        None, description="Codec, sample rate and bitrate of the generated audio"
    )
    enable_logging: bool | None = Field(
        None, description="False enables zero retention mode (enterprise only)"
    )
    optimize_streaming_latency: int | None = Field(
        None, ge=0, le=4, description="Latency optimization level, 0 (off) to 4 (max)"
    )


class PageQuery(QueryModel):
    """Cursor pagination shared by the listing endpoints."""

    cursor: str | None = None
    page_size: int | None = Field(None, ge=1, le=100)


# =============================================================================
# Voice settings
# =============================================================================


class VoiceSettings(BaseModel):
    """Synthesis settings of a voice."""

    model_config = ConfigDict(extra="allow")

    stability: float | None = Field(None, ge=0.0, le=1.0)
    similarity_boost: float | None = Field(None, ge=0.0, le=1.0)
    style: float | None = Field(None, ge=0.0, le=1.0)
    use_speaker_boost: bool | None = None
    speed: float | None = None

    def to_json_body(self) -> JsonBody:
        return JsonBody(self.model_dump(mode="json", exclude_none=True))
