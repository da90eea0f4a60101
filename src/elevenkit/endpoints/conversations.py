"""Conversational AI conversation endpoints.

``GetSignedUrl`` is also used by ``Session.open(signed=True)`` to authenticate
a WebSocket session without exposing the API key in the URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from ..transport import RequestBody
from .base import BaseEndpoint, BytesEndpoint, NoContentEndpoint
from .schemas import PageQuery, RequestModel, ResponseModel

CallSuccessful = Literal["success", "failure", "unknown"]
Score = Literal["like", "dislike"]


# =============================================================================
# Responses
# =============================================================================


class SignedUrlResponse(ResponseModel):
    signed_url: str


class ConversationSummary(ResponseModel):
    agent_id: str
    conversation_id: str
    agent_name: str | None = None
    start_time_unix_secs: int | None = None
    call_duration_secs: int | None = None
    message_count: int | None = None
    status: str | None = None
    call_successful: CallSuccessful | None = None


class ConversationsPage(ResponseModel):
    conversations: list[ConversationSummary]
    has_more: bool = False
    next_cursor: str | None = None


class TranscriptTurn(ResponseModel):
    role: Literal["user", "agent"]
    message: str | None = None
    time_in_call_secs: float | None = None
    tool_calls: list[dict[str, Any]] | None = None
    tool_results: list[dict[str, Any]] | None = None


class ConversationDetails(ResponseModel):
    agent_id: str
    conversation_id: str
    status: str
    transcript: list[TranscriptTurn] | None = None
    metadata: dict[str, Any] | None = None
    analysis: dict[str, Any] | None = None
    conversation_initiation_client_data: dict[str, Any] | None = None


# =============================================================================
# Endpoints
# =============================================================================


@dataclass
class GetSignedUrl(BaseEndpoint[SignedUrlResponse]):
    """Request a short-lived authenticated WebSocket URL for an agent."""

    PATH = "/v1/convai/conversation/get_signed_url"
    response_model = SignedUrlResponse

    agent_id: str

    def query_params(self) -> dict[str, Any] | None:
        return {"agent_id": self.agent_id}


class ConversationsQuery(PageQuery):
    agent_id: str | None = None
    call_successful: CallSuccessful | None = None


@dataclass
class GetConversations(BaseEndpoint[ConversationsPage]):
    PATH = "/v1/convai/conversations"
    response_model = ConversationsPage

    query: ConversationsQuery | None = None

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None


@dataclass
class GetConversationDetails(BaseEndpoint[ConversationDetails]):
    PATH = "/v1/convai/conversations/:conversation_id"
    response_model = ConversationDetails

    conversation_id: str

    def path_params(self) -> dict[str, str]:
        return {"conversation_id": self.conversation_id}


@dataclass
class DeleteConversation(NoContentEndpoint):
    METHOD = "DELETE"
    PATH = "/v1/convai/conversations/:conversation_id"

    conversation_id: str

    def path_params(self) -> dict[str, str]:
        return {"conversation_id": self.conversation_id}


@dataclass
class GetConversationAudio(BytesEndpoint):
    """Download the recording of a conversation."""

    PATH = "/v1/convai/conversations/:conversation_id/audio"

    conversation_id: str

    def path_params(self) -> dict[str, str]:
        return {"conversation_id": self.conversation_id}


class FeedbackBody(RequestModel):
    feedback: Score


@dataclass
class SendConversationFeedback(NoContentEndpoint):
    METHOD = "POST"
    PATH = "/v1/convai/conversations/:conversation_id/feedback"

    conversation_id: str
    feedback: Score

    def path_params(self) -> dict[str, str]:
        return {"conversation_id": self.conversation_id}

    def request_body(self) -> RequestBody | None:
        return FeedbackBody(feedback=self.feedback).to_json_body()
