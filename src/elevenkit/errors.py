"""Exception hierarchy for the ElevenLabs client.

Every failure surfaced by the library derives from ``ElevenLabsError`` so callers
can catch the whole family, while the subclasses keep "the server said no"
(``APIError``) apart from "we could not understand the server" (``DecodeError``)
and from connection-level problems (``TransportError``).
"""

from __future__ import annotations

from typing import Any


class ElevenLabsError(Exception):
    """Base class for all client errors."""


class ConfigurationError(ElevenLabsError):
    """Raised when the client cannot be configured (e.g. no API key)."""


class TransportError(ElevenLabsError):
    """Connection could not be established or was interrupted mid-transfer."""


class APIError(ElevenLabsError):
    """Non-success HTTP status carrying the provider's structured error body.

    Attributes:
        status_code: HTTP status returned by the API.
        code: Provider error code (``detail.status``), if present.
        message: Provider error message, verbatim.
        details: Any remaining structured detail (validation errors, etc.).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        label = f"{status_code} {code}" if code else str(status_code)
        super().__init__(f"API error {label}: {message}")


class DecodeError(ElevenLabsError):
    """A response body, frame or audio payload did not match the expected shape.

    Attributes:
        payload: The raw payload that failed to decode (possibly truncated).
        status_code: HTTP status when the failure concerns an HTTP response.
    """

    def __init__(
        self,
        message: str,
        payload: str | bytes | None = None,
        status_code: int | None = None,
    ) -> None:
        self.payload = payload
        self.status_code = status_code
        super().__init__(message)


# =============================================================================
# Conversational session errors
# =============================================================================


class SessionError(ElevenLabsError):
    """Base class for conversational session failures."""


class HandshakeError(SessionError):
    """The session did not receive a valid initiation message in time."""


class SessionClosedError(SessionError):
    """Operation attempted on a session that is closing or closed."""


class ConnectionClosedError(SessionError):
    """The WebSocket closed abnormally (non-normal code or no close frame)."""

    def __init__(self, code: int | None, reason: str = "") -> None:
        self.code = code
        self.reason = reason
        if code is None:
            super().__init__("WebSocket closed without a close frame")
        else:
            super().__init__(f"WebSocket closed with code {code}: {reason}")


class ResourceExhaustedError(SessionError):
    """The receive buffer filled up because the consumer stopped reading."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Event buffer exceeded {limit} undelivered messages; consumer stalled"
        )
