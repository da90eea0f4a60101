"""Protocol definitions for elevenkit interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    import httpx

    from .transport import RequestBody

ResponseT_co = TypeVar("ResponseT_co", covariant=True)


@runtime_checkable
class Endpoint(Protocol[ResponseT_co]):
    """Protocol every REST endpoint value implements.

    The dispatcher (``ElevenLabsClient.hit``) only ever talks to this
    interface, so new endpoints are added by implementing it, never by
    touching dispatch logic. ``BaseEndpoint`` provides sensible defaults.
    """

    METHOD: ClassVar[str]
    STREAMING: ClassVar[bool]

    def path(self) -> str:
        """Return the URL path with all path parameters interpolated."""
        ...

    def query_params(self) -> dict[str, Any] | None:
        """Return query parameters, or None when the endpoint takes none."""
        ...

    def request_body(self) -> RequestBody | None:
        """Return the request body (JSON or multipart), or None."""
        ...

    def parse_response(self, response: httpx.Response) -> ResponseT_co:
        """Decode a successful response into the endpoint's response type.

        Args:
            response: The HTTP response. For streaming endpoints the body
                has not been read yet.

        Returns:
            The typed response value.

        Raises:
            DecodeError: If the body does not match the expected shape.
        """
        ...


@runtime_checkable
class AudioSink(Protocol):
    """Playback or decoding collaborator fed incrementally with audio bytes."""

    def push(self, chunk: bytes) -> None:
        """Accept the next chunk of audio."""
        ...


@runtime_checkable
class WebSocketConnection(Protocol):
    """Minimal duplex connection the conversational session drives.

    ``websockets`` client connections satisfy it; tests substitute an
    in-memory double.
    """

    async def send(self, message: str) -> None:
        """Write one text frame."""
        ...

    async def recv(self) -> str | bytes:
        """Read the next frame. Raises ``websockets.ConnectionClosed`` at end."""
        ...

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Close the connection with the given code and reason."""
        ...
