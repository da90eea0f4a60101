"""elevenkit - Async client for the ElevenLabs text-to-speech and conversational AI APIs."""

from .audio import BufferSink, FileSink, iter_audio_frames, save, stream_audio
from .client import ElevenLabsClient
from .config import ClientConfig, SessionOptions
from .constants import DefaultVoice, Model, OutputFormat, SpeechToTextModel
from .convai import ClientToolCall, ClientToolResult, Session, SessionState
from .convai.messages import decode_base64_audio
from .errors import (
    APIError,
    ConfigurationError,
    ConnectionClosedError,
    DecodeError,
    ElevenLabsError,
    HandshakeError,
    ResourceExhaustedError,
    SessionClosedError,
    SessionError,
    TransportError,
)
from .protocols import AudioSink, Endpoint, WebSocketConnection
from .transport import FilePart, JsonBody, MultipartBody, Transport

__all__ = [
    # Client
    "ElevenLabsClient",
    "ClientConfig",
    "Endpoint",
    "Transport",
    "JsonBody",
    "MultipartBody",
    "FilePart",
    # Conversational sessions
    "Session",
    "SessionOptions",
    "SessionState",
    "ClientToolCall",
    "ClientToolResult",
    "WebSocketConnection",
    # Audio
    "AudioSink",
    "BufferSink",
    "FileSink",
    "decode_base64_audio",
    "iter_audio_frames",
    "save",
    "stream_audio",
    # Constants
    "DefaultVoice",
    "Model",
    "OutputFormat",
    "SpeechToTextModel",
    # Errors
    "ElevenLabsError",
    "APIError",
    "ConfigurationError",
    "ConnectionClosedError",
    "DecodeError",
    "HandshakeError",
    "ResourceExhaustedError",
    "SessionClosedError",
    "SessionError",
    "TransportError",
]
