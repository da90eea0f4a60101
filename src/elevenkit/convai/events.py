"""Session lifecycle states and the local events published next to server messages."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field

from .messages import ServerMessage


class SessionState(str, Enum):
    """Lifecycle of a conversational session. ``ERRORED`` is absorbing."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"
    ERRORED = "errored"


class ToolCallMismatch(BaseModel):
    """A tool result was sent for a call id that is not outstanding."""

    type: Literal["tool_call_mismatch"] = "tool_call_mismatch"
    tool_call_id: str = Field(..., description="Id carried by the rejected result")
    forwarded: bool = Field(..., description="Whether the result was still sent to the server")


class DecodeFailure(BaseModel):
    """A server frame could not be decoded. The session keeps running."""

    type: Literal["decode_failure"] = "decode_failure"
    error: str = Field(..., description="Why decoding failed")
    payload: str = Field(..., description="Raw frame, possibly truncated")


SessionEvent = Union[ServerMessage, ToolCallMismatch, DecodeFailure]
