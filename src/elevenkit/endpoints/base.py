"""Base classes for REST endpoint values.

An endpoint describes one remote operation: method, path template, optional
query/body, and how to decode the response. Concrete endpoints subclass
``BaseEndpoint[ResponseType]`` and override only what differs.

Example:
    @dataclass
    class GetVoice(BaseEndpoint[GetVoiceResponse]):
        PATH = "/v1/voices/:voice_id"
        response_model = GetVoiceResponse

        voice_id: str

        def path_params(self) -> dict[str, str]:
            return {"voice_id": self.voice_id}
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from typing import Any, ClassVar, Generic, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import DecodeError, TransportError
from ..transport import RequestBody

ResponseT = TypeVar("ResponseT")
ModelT = TypeVar("ModelT", bound=BaseModel)

# Path templates use ":name" placeholders, e.g. "/v1/voices/:voice_id"
_PATH_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

# Bytes of a bad payload kept on DecodeError
_PAYLOAD_PREVIEW = 1000


def decode_json(response: httpx.Response, model: type[ModelT]) -> ModelT:
    """Validate a response body against a pydantic model.

    Raises:
        DecodeError: If the body is not JSON or does not match the model.
    """
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise DecodeError(
            f"Response body did not match {model.__name__}: {e}",
            payload=response.content[:_PAYLOAD_PREVIEW],
            status_code=response.status_code,
        ) from e


async def iter_response_bytes(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield the body of a streamed response chunk by chunk, then close it."""
    try:
        async for chunk in response.aiter_bytes():
            if chunk:
                yield chunk
    except httpx.TransportError as e:
        raise TransportError(f"Stream interrupted: {type(e).__name__}: {e}") from e
    finally:
        await response.aclose()


class BaseEndpoint(Generic[ResponseT]):
    """Default implementation of the ``Endpoint`` protocol.

    Subclasses set ``PATH`` (and ``METHOD`` when not GET) and either
    ``response_model`` for JSON responses or override ``parse_response``.
    """

    METHOD: ClassVar[str] = "GET"
    PATH: ClassVar[str] = ""
    STREAMING: ClassVar[bool] = False
    response_model: ClassVar[type[BaseModel] | None] = None

    def path_params(self) -> dict[str, str]:
        """Values for the ``:name`` placeholders in ``PATH``."""
        return {}

    def path(self) -> str:
        params = self.path_params()

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in params:
                raise ValueError(f"{type(self).__name__} is missing path parameter '{name}'")
            return quote(str(params[name]), safe="")

        path = _PATH_PARAM.sub(_substitute, self.PATH)
        return path if path.startswith("/") else f"/{path}"

    def query_params(self) -> dict[str, Any] | None:
        return None

    def request_body(self) -> RequestBody | None:
        return None

    def parse_response(self, response: httpx.Response) -> ResponseT:
        if self.response_model is None:
            raise NotImplementedError(
                f"{type(self).__name__} must set response_model or override parse_response"
            )
        return decode_json(response, self.response_model)  # type: ignore[return-value]


class BytesEndpoint(BaseEndpoint[bytes]):
    """Endpoint whose response is a complete binary body (audio, archives)."""

    def parse_response(self, response: httpx.Response) -> bytes:
        return response.content


class StreamingEndpoint(BaseEndpoint[AsyncIterator[bytes]]):
    """Endpoint whose binary response is consumed incrementally."""

    STREAMING = True

    def parse_response(self, response: httpx.Response) -> AsyncIterator[bytes]:
        return iter_response_bytes(response)


class NoContentEndpoint(BaseEndpoint[None]):
    """Endpoint that returns no payload on success."""

    def parse_response(self, response: httpx.Response) -> None:
        return None
