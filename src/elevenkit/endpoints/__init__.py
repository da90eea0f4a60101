"""REST endpoint values for the ElevenLabs API.

Each endpoint is a small dataclass executed with ``ElevenLabsClient.hit``.
"""

from .agents import Agent, AgentsPage, AgentsQuery, AgentSummary, DeleteAgent, GetAgent, GetAgents
from .base import BaseEndpoint, BytesEndpoint, NoContentEndpoint, StreamingEndpoint
from .conversations import (
    ConversationDetails,
    ConversationsPage,
    ConversationsQuery,
    DeleteConversation,
    GetConversationAudio,
    GetConversationDetails,
    GetConversations,
    GetSignedUrl,
    SendConversationFeedback,
    SignedUrlResponse,
)
from .knowledge_base import GetKnowledgeBase, GetTool, KnowledgeBaseDocument, ListTools, Tool, ToolsList
from .schemas import PageQuery, SpeechQuery, StatusResponse, VoiceSettings
from .sound_effects import SoundEffectBody, SoundEffectQuery, TextToSoundEffects
from .speech_to_text import CreateTranscript, TranscriptQuery, TranscriptResponse, Word
from .tts import (
    Alignment,
    TextToSpeech,
    TextToSpeechBody,
    TextToSpeechStream,
    TextToSpeechWithTimestamps,
    TextToSpeechWithTimestampsResponse,
)
from .voices import (
    AddVoice,
    AddVoiceResponse,
    DeleteVoice,
    EditVoiceSettings,
    GetVoice,
    GetVoices,
    GetVoiceSettings,
    Voice,
    VoicesPage,
    VoicesQuery,
    voice_sample,
)

__all__ = [
    # Base classes
    "BaseEndpoint",
    "BytesEndpoint",
    "NoContentEndpoint",
    "StreamingEndpoint",
    # Shared
    "PageQuery",
    "SpeechQuery",
    "StatusResponse",
    "VoiceSettings",
    # Text to speech
    "Alignment",
    "TextToSpeech",
    "TextToSpeechBody",
    "TextToSpeechStream",
    "TextToSpeechWithTimestamps",
    "TextToSpeechWithTimestampsResponse",
    # Sound effects
    "SoundEffectBody",
    "SoundEffectQuery",
    "TextToSoundEffects",
    # Speech to text
    "CreateTranscript",
    "TranscriptQuery",
    "TranscriptResponse",
    "Word",
    # Voices
    "AddVoice",
    "AddVoiceResponse",
    "DeleteVoice",
    "EditVoiceSettings",
    "GetVoice",
    "GetVoices",
    "GetVoiceSettings",
    "Voice",
    "VoicesPage",
    "VoicesQuery",
    "voice_sample",
    # Agents
    "Agent",
    "AgentSummary",
    "AgentsPage",
    "AgentsQuery",
    "DeleteAgent",
    "GetAgent",
    "GetAgents",
    # Conversations
    "ConversationDetails",
    "ConversationsPage",
    "ConversationsQuery",
    "DeleteConversation",
    "GetConversationAudio",
    "GetConversationDetails",
    "GetConversations",
    "GetSignedUrl",
    "SendConversationFeedback",
    "SignedUrlResponse",
    # Knowledge base and tools
    "GetKnowledgeBase",
    "GetTool",
    "KnowledgeBaseDocument",
    "ListTools",
    "Tool",
    "ToolsList",
]
