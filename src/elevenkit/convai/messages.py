"""Wire messages of the conversational AI WebSocket.

Every frame is a JSON object discriminated by its ``type`` field, except the
client's audio frame which the provider identifies by its
``user_audio_chunk`` key alone.

Example:
    message = parse_server_message('{"type": "ping", "ping_event": {"event_id": 3}}')
    reply = to_wire(Pong(event_id=message.event_id))
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError

from ..errors import DecodeError

DynamicVariable = Union[str, int, float, bool, None]


def decode_base64_audio(data: str) -> bytes:
    """Decode a base64 audio payload.

    Raises:
        DecodeError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid base64 audio: {e}", payload=data[:100]) from e


# =============================================================================
# Client -> server
# =============================================================================


class UserAudioChunk(BaseModel):
    """Base64-encoded microphone audio in the agent's input format."""

    # Not sent on the wire; the provider recognizes the frame by key
    type: Literal["user_audio_chunk"] = Field("user_audio_chunk", exclude=True)
    user_audio_chunk: str

    @classmethod
    def from_bytes(cls, audio: bytes) -> UserAudioChunk:
        return cls(user_audio_chunk=base64.b64encode(audio).decode("ascii"))


class Pong(BaseModel):
    type: Literal["pong"] = "pong"
    event_id: int


class PromptOverride(BaseModel):
    prompt: str | None = None


class AgentOverride(BaseModel):
    prompt: PromptOverride | None = None
    first_message: str | None = None
    language: str | None = None


class TTSOverride(BaseModel):
    voice_id: str | None = None


class ConversationConfigOverride(BaseModel):
    """Per-conversation overrides of the agent's configuration.

    Example:
        ConversationConfigOverride.build(prompt="Be brief.", language="en")
    """

    agent: AgentOverride | None = None
    tts: TTSOverride | None = None

    @classmethod
    def build(
        cls,
        *,
        prompt: str | None = None,
        first_message: str | None = None,
        language: str | None = None,
        voice_id: str | None = None,
    ) -> ConversationConfigOverride:
        agent = None
        if prompt is not None or first_message is not None or language is not None:
            agent = AgentOverride(
                prompt=PromptOverride(prompt=prompt) if prompt is not None else None,
                first_message=first_message,
                language=language,
            )
        tts = TTSOverride(voice_id=str(voice_id)) if voice_id is not None else None
        return cls(agent=agent, tts=tts)


class CustomLlmExtraBody(BaseModel):
    """Extra parameters forwarded to a custom LLM."""

    model_config = ConfigDict(extra="allow")

    temperature: float | None = None
    max_tokens: int | None = None


class ConversationInitiationClientData(BaseModel):
    """Configuration sent as the first client frame of a conversation."""

    type: Literal["conversation_initiation_client_data"] = "conversation_initiation_client_data"
    conversation_config_override: ConversationConfigOverride | None = None
    custom_llm_extra_body: CustomLlmExtraBody | None = None
    dynamic_variables: dict[str, DynamicVariable] | None = None


class ClientToolResult(BaseModel):
    """Answer to a ``ClientToolCall``, correlated by ``tool_call_id``."""

    type: Literal["client_tool_result"] = "client_tool_result"
    tool_call_id: str
    result: str = ""
    is_error: bool = False

    @classmethod
    def success(cls, tool_call_id: str, result: Any) -> ClientToolResult:
        if not isinstance(result, str):
            result = json.dumps(result)
        return cls(tool_call_id=tool_call_id, result=result)

    @classmethod
    def failure(cls, tool_call_id: str, error: str) -> ClientToolResult:
        return cls(tool_call_id=tool_call_id, result=error, is_error=True)


class ContextualUpdate(BaseModel):
    """Background information for the agent that does not prompt a reply."""

    type: Literal["contextual_update"] = "contextual_update"
    text: str


class UserMessage(BaseModel):
    """A text turn from the user."""

    type: Literal["user_message"] = "user_message"
    text: str


class UserActivity(BaseModel):
    """Signals user presence so the agent holds its turn."""

    type: Literal["user_activity"] = "user_activity"


def _client_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        if "type" in value:
            return value["type"]
        if "user_audio_chunk" in value:
            return "user_audio_chunk"
        return None
    return getattr(value, "type", None)


ClientMessage = Annotated[
    Union[
        Annotated[UserAudioChunk, Tag("user_audio_chunk")],
        Annotated[Pong, Tag("pong")],
        Annotated[ConversationInitiationClientData, Tag("conversation_initiation_client_data")],
        Annotated[ClientToolResult, Tag("client_tool_result")],
        Annotated[ContextualUpdate, Tag("contextual_update")],
        Annotated[UserMessage, Tag("user_message")],
        Annotated[UserActivity, Tag("user_activity")],
    ],
    Discriminator(_client_tag),
]


# =============================================================================
# Server -> client
# =============================================================================


class _ServerMessageBase(BaseModel):
    model_config = ConfigDict(extra="ignore")


class InitiationMetadataEvent(BaseModel):
    conversation_id: str
    agent_output_audio_format: str
    user_input_audio_format: str | None = None


class ConversationInitiationMetadata(_ServerMessageBase):
    """First server frame of every conversation."""

    type: Literal["conversation_initiation_metadata"] = "conversation_initiation_metadata"
    conversation_initiation_metadata_event: InitiationMetadataEvent

    @property
    def conversation_id(self) -> str:
        return self.conversation_initiation_metadata_event.conversation_id


class UserTranscriptionEvent(BaseModel):
    user_transcript: str


class UserTranscript(_ServerMessageBase):
    type: Literal["user_transcript"] = "user_transcript"
    user_transcription_event: UserTranscriptionEvent

    @property
    def text(self) -> str:
        return self.user_transcription_event.user_transcript


class AgentResponseEvent(BaseModel):
    agent_response: str


class AgentResponse(_ServerMessageBase):
    type: Literal["agent_response"] = "agent_response"
    agent_response_event: AgentResponseEvent

    @property
    def text(self) -> str:
        return self.agent_response_event.agent_response


class AgentResponseCorrectionEvent(BaseModel):
    original_agent_response: str
    corrected_agent_response: str


class AgentResponseCorrection(_ServerMessageBase):
    """The agent's previous response was truncated by an interruption."""

    type: Literal["agent_response_correction"] = "agent_response_correction"
    agent_response_correction_event: AgentResponseCorrectionEvent


class AudioEvent(BaseModel):
    audio_base_64: str
    event_id: int


class Audio(_ServerMessageBase):
    type: Literal["audio"] = "audio"
    audio_event: AudioEvent

    @property
    def event_id(self) -> int:
        return self.audio_event.event_id

    def audio_bytes(self) -> bytes:
        """Decode the audio payload.

        Raises:
            DecodeError: If the payload is not valid base64.
        """
        return decode_base64_audio(self.audio_event.audio_base_64)


class InterruptionEvent(BaseModel):
    event_id: int


class Interruption(_ServerMessageBase):
    """The user interrupted; audio after ``event_id`` should be discarded."""

    type: Literal["interruption"] = "interruption"
    interruption_event: InterruptionEvent

    @property
    def event_id(self) -> int:
        return self.interruption_event.event_id


class PingEvent(BaseModel):
    event_id: int
    ping_ms: int | None = None


class Ping(_ServerMessageBase):
    type: Literal["ping"] = "ping"
    ping_event: PingEvent

    @property
    def event_id(self) -> int:
        return self.ping_event.event_id


class ClientToolCallEvent(BaseModel):
    tool_name: str
    tool_call_id: str
    parameters: dict[str, Any] = {}


class ClientToolCall(_ServerMessageBase):
    """The agent asks the client to run a tool and answer with a result."""

    type: Literal["client_tool_call"] = "client_tool_call"
    client_tool_call: ClientToolCallEvent

    @property
    def id(self) -> str:
        return self.client_tool_call.tool_call_id

    @property
    def name(self) -> str:
        return self.client_tool_call.tool_name

    @property
    def parameters(self) -> dict[str, Any]:
        return self.client_tool_call.parameters


class VadScoreEvent(BaseModel):
    vad_score: float


class VadScore(_ServerMessageBase):
    type: Literal["vad_score"] = "vad_score"
    vad_score_internal_event: VadScoreEvent


class TentativeAgentResponseEvent(BaseModel):
    tentative_agent_response: str


class TentativeAgentResponse(_ServerMessageBase):
    type: Literal["internal_tentative_agent_response"] = "internal_tentative_agent_response"
    tentative_agent_response_internal_event: TentativeAgentResponseEvent


class TurnProbabilityEvent(BaseModel):
    turn_probability: float


class TurnProbability(_ServerMessageBase):
    type: Literal["internal_turn_probability"] = "internal_turn_probability"
    turn_probability_internal_event: TurnProbabilityEvent


class McpToolCallEvent(BaseModel):
    service_id: str
    tool_call_id: str
    tool_name: str
    tool_description: str | None = None
    parameters: dict[str, Any] = {}
    timestamp: str
    state: str


class McpToolCall(_ServerMessageBase):
    type: Literal["mcp_tool_call"] = "mcp_tool_call"
    mcp_tool_call: McpToolCallEvent


class IntegrationStatus(BaseModel):
    integration_id: str
    integration_type: str
    is_connected: bool
    tool_count: int


class McpConnectionStatusEvent(BaseModel):
    integrations: list[IntegrationStatus] = []


class McpConnectionStatus(_ServerMessageBase):
    type: Literal["mcp_connection_status"] = "mcp_connection_status"
    mcp_connection_status: McpConnectionStatusEvent


ServerMessage = Annotated[
    Union[
        ConversationInitiationMetadata,
        UserTranscript,
        AgentResponse,
        AgentResponseCorrection,
        Audio,
        Interruption,
        Ping,
        ClientToolCall,
        VadScore,
        TentativeAgentResponse,
        TurnProbability,
        McpToolCall,
        McpConnectionStatus,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Encoding / decoding
# =============================================================================

_client_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)
_server_adapter: TypeAdapter[ServerMessage] = TypeAdapter(ServerMessage)


def to_wire(message: BaseModel) -> str:
    """Serialize a message to its JSON text frame."""
    return message.model_dump_json(exclude_none=True)


def parse_client_message(raw: str | bytes) -> ClientMessage:
    """Decode a client message frame.

    Raises:
        DecodeError: If the frame is not a known client message.
    """
    try:
        return _client_adapter.validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Invalid client message: {e}", payload=raw[:1000]) from e


def parse_server_message(raw: str | bytes) -> ServerMessage:
    """Decode a server message frame.

    Raises:
        DecodeError: If the frame is malformed or of an unknown type.
    """
    try:
        return _server_adapter.validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Invalid server message: {e}", payload=raw[:1000]) from e
