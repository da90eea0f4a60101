"""HTTP transport shared by every REST call.

Wraps a single pooled ``httpx.AsyncClient``. The transport performs exactly
one round trip per call, never retries, and leaves status handling to the
dispatcher so that error bodies can still be decoded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilePart:
    """One binary part of a multipart upload."""

    field: str
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class JsonBody:
    """JSON request body."""

    data: dict[str, Any]


@dataclass(frozen=True)
class MultipartBody:
    """Multipart form body: plain fields plus file parts."""

    fields: dict[str, str | list[str]] = field(default_factory=dict)
    files: list[FilePart] = field(default_factory=list)


RequestBody = Union[JsonBody, MultipartBody]


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop unset query parameters."""
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None}


class Transport:
    """Async HTTP transport over a pooled httpx client.

    The pool is shared by every clone of the owning client; each call owns its
    own request/response exchange, so no locking is required.
    """

    def __init__(
        self,
        timeout: float | None = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: HTTP timeout in seconds for the default client.
            http_client: Pre-configured client to use instead (e.g. one built
                on ``httpx.MockTransport`` in tests). It is still closed by
                ``aclose``.
        """
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        body: RequestBody | None = None,
        stream: bool = False,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        Args:
            method: HTTP method.
            url: Absolute URL.
            headers: Extra request headers.
            params: Query parameters; ``None`` values are dropped.
            body: JSON or multipart body, or None.
            stream: Leave the response body unread so it can be consumed
                incrementally. The caller must close the response.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: If the connection fails or is interrupted.
        """
        kwargs: dict[str, Any] = {}
        if isinstance(body, JsonBody):
            kwargs["json"] = body.data
        elif isinstance(body, MultipartBody):
            kwargs["data"] = body.fields
            kwargs["files"] = [
                (part.field, (part.filename, part.content, part.content_type))
                for part in body.files
            ]

        request = self._client.build_request(
            method,
            url,
            headers=headers,
            params=_clean_params(params),
            **kwargs,
        )
        logger.debug(f"[TRANSPORT] {method} {request.url}")

        try:
            return await self._client.send(request, stream=stream)
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {type(e).__name__}: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> Transport:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
