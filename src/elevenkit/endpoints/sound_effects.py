"""Text to sound effects endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import Field

from ..constants import OutputFormat
from ..transport import RequestBody
from .base import BytesEndpoint
from .schemas import QueryModel, RequestModel


class SoundEffectBody(RequestModel):
    text: str = Field(..., min_length=1, description="Description of the sound to generate")
    duration_seconds: float | None = Field(
        None, ge=0.5, le=22.0, description="Length of the sound; guessed from the prompt if unset"
    )
    prompt_influence: float | None = Field(
        0.3, ge=0.0, le=1.0, description="How closely generation follows the prompt"
    )


class SoundEffectQuery(QueryModel):
    output_format: OutputFormat | None = None


@dataclass
class TextToSoundEffects(BytesEndpoint):
    """Generate a sound effect from a text description."""

    METHOD = "POST"
    PATH = "/v1/sound-generation"

    body: SoundEffectBody
    query: SoundEffectQuery | None = None

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None

    def request_body(self) -> RequestBody | None:
        return self.body.to_json_body()
