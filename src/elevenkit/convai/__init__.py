"""Conversational AI sessions over WebSocket."""

from .events import DecodeFailure, SessionEvent, SessionState, ToolCallMismatch
from .messages import (
    AgentResponse,
    AgentResponseCorrection,
    Audio,
    ClientMessage,
    ClientToolCall,
    ClientToolResult,
    ContextualUpdate,
    ConversationConfigOverride,
    ConversationInitiationClientData,
    ConversationInitiationMetadata,
    CustomLlmExtraBody,
    Interruption,
    McpConnectionStatus,
    McpToolCall,
    Ping,
    Pong,
    ServerMessage,
    TentativeAgentResponse,
    TurnProbability,
    UserActivity,
    UserAudioChunk,
    UserMessage,
    UserTranscript,
    VadScore,
    parse_client_message,
    parse_server_message,
    to_wire,
)
from .session import Session, connect_websocket

__all__ = [
    # Session
    "Session",
    "SessionState",
    "connect_websocket",
    # Local events
    "DecodeFailure",
    "SessionEvent",
    "ToolCallMismatch",
    # Client messages
    "ClientMessage",
    "ClientToolResult",
    "ContextualUpdate",
    "ConversationConfigOverride",
    "ConversationInitiationClientData",
    "CustomLlmExtraBody",
    "Pong",
    "UserActivity",
    "UserAudioChunk",
    "UserMessage",
    # Server messages
    "AgentResponse",
    "AgentResponseCorrection",
    "Audio",
    "ClientToolCall",
    "ConversationInitiationMetadata",
    "Interruption",
    "McpConnectionStatus",
    "McpToolCall",
    "Ping",
    "ServerMessage",
    "TentativeAgentResponse",
    "TurnProbability",
    "UserTranscript",
    "VadScore",
    # Codec
    "parse_client_message",
    "parse_server_message",
    "to_wire",
]
