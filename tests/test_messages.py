"""Tests for WebSocket message encoding and decoding."""

from __future__ import annotations

import json

import pytest

from elevenkit import DecodeError
from elevenkit.convai import (
    AgentResponseCorrection,
    Audio,
    ClientToolCall,
    ClientToolResult,
    ContextualUpdate,
    ConversationConfigOverride,
    ConversationInitiationClientData,
    ConversationInitiationMetadata,
    CustomLlmExtraBody,
    McpConnectionStatus,
    Ping,
    Pong,
    UserActivity,
    UserAudioChunk,
    UserMessage,
    VadScore,
    parse_client_message,
    parse_server_message,
    to_wire,
)


# ---------------------------------------------------------------------------
# Client messages
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "message",
    [
        UserAudioChunk.from_bytes(b"\x00\x01\x02"),
        Pong(event_id=12),
        ClientToolResult.success("call_1", {"temperature": 21}),
        ContextualUpdate(text="User opened the billing page"),
        UserMessage(text="What's my balance?"),
        UserActivity(),
        ConversationInitiationClientData(
            conversation_config_override=ConversationConfigOverride.build(
                prompt="Be brief.", first_message="Hi!", language="en", voice_id="v1"
            ),
            custom_llm_extra_body=CustomLlmExtraBody(temperature=0.2, max_tokens=100),
            dynamic_variables={"name": "Ada", "age": 36, "vip": True, "order_id": None},
        ),
    ],
)
def test_client_message_survives_the_wire(message):
    decoded = parse_client_message(to_wire(message))
    assert type(decoded) is type(message)
    assert decoded == message


def test_audio_chunk_has_no_type_on_the_wire():
    wire = json.loads(to_wire(UserAudioChunk.from_bytes(b"\x00\x01")))
    assert wire == {"user_audio_chunk": "AAE="}


def test_initiation_data_wire_shape():
    message = ConversationInitiationClientData(
        conversation_config_override=ConversationConfigOverride.build(first_message="Hello"),
        dynamic_variables={"name": "Ada", "order_id": None},
    )
    assert json.loads(to_wire(message)) == {
        "type": "conversation_initiation_client_data",
        "conversation_config_override": {"agent": {"first_message": "Hello"}},
        "dynamic_variables": {"name": "Ada", "order_id": None},
    }


def test_tool_result_builders():
    ok = ClientToolResult.success("call_1", {"rows": 2})
    assert (ok.result, ok.is_error) == ('{"rows": 2}', False)

    failed = ClientToolResult.failure("call_1", "database offline")
    assert json.loads(to_wire(failed)) == {
        "type": "client_tool_result",
        "tool_call_id": "call_1",
        "result": "database offline",
        "is_error": True,
    }


def test_unknown_client_message_is_rejected():
    with pytest.raises(DecodeError):
        parse_client_message('{"type": "shout", "text": "hi"}')


# ---------------------------------------------------------------------------
# Server messages
# ---------------------------------------------------------------------------


def test_initiation_metadata():
    message = parse_server_message(
        json.dumps(
            {
                "type": "conversation_initiation_metadata",
                "conversation_initiation_metadata_event": {
                    "conversation_id": "conv_1",
                    "agent_output_audio_format": "pcm_16000",
                },
            }
        )
    )
    assert isinstance(message, ConversationInitiationMetadata)
    assert message.conversation_id == "conv_1"
    assert message.conversation_initiation_metadata_event.user_input_audio_format is None


def test_client_tool_call_accessors():
    message = parse_server_message(
        '{"type": "client_tool_call", "client_tool_call": '
        '{"tool_name": "lookup", "tool_call_id": "call_1", "parameters": {"q": "x"}}}'
    )
    assert isinstance(message, ClientToolCall)
    assert (message.id, message.name, message.parameters) == ("call_1", "lookup", {"q": "x"})


def test_audio_event_decodes_payload():
    message = parse_server_message(
        '{"type": "audio", "audio_event": {"audio_base_64": "AAE=", "event_id": 4}}'
    )
    assert isinstance(message, Audio)
    assert message.event_id == 4
    assert message.audio_bytes() == b"\x00\x01"


def test_audio_event_with_invalid_base64():
    message = parse_server_message(
        '{"type": "audio", "audio_event": {"audio_base_64": "@@@", "event_id": 1}}'
    )
    with pytest.raises(DecodeError):
        message.audio_bytes()


@pytest.mark.parametrize(
    "frame, expected",
    [
        ({"type": "ping", "ping_event": {"event_id": 3, "ping_ms": 40}}, Ping),
        ({"type": "vad_score", "vad_score_internal_event": {"vad_score": 0.9}}, VadScore),
        (
            {
                "type": "agent_response_correction",
                "agent_response_correction_event": {
                    "original_agent_response": "The answer is",
                    "corrected_agent_response": "The ans",
                },
            },
            AgentResponseCorrection,
        ),
        (
            {
                "type": "mcp_connection_status",
                "mcp_connection_status": {
                    "integrations": [
                        {
                            "integration_id": "i1",
                            "integration_type": "mcp_server",
                            "is_connected": True,
                            "tool_count": 3,
                        }
                    ]
                },
            },
            McpConnectionStatus,
        ),
    ],
)
def test_server_message_survives_the_wire(frame, expected):
    message = parse_server_message(json.dumps(frame))
    assert isinstance(message, expected)
    assert parse_server_message(to_wire(message)) == message


def test_unknown_server_message_is_rejected():
    with pytest.raises(DecodeError) as exc_info:
        parse_server_message('{"type": "telepathy"}')
    assert exc_info.value.payload == '{"type": "telepathy"}'


def test_malformed_frame_is_rejected():
    with pytest.raises(DecodeError):
        parse_server_message("not json")
