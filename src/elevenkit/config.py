"""Client configuration settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.elevenlabs.io"
DEFAULT_WS_BASE_URL = "wss://api.elevenlabs.io"
API_KEY_ENV = "ELEVENLABS_API_KEY"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for an ElevenLabs client."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    ws_base_url: str = DEFAULT_WS_BASE_URL

    # HTTP request timeout in seconds (None disables it)
    timeout: float | None = 120.0

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                f"No API key provided. Set {API_KEY_ENV} environment variable "
                "or pass api_key parameter."
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "ws_base_url", self.ws_base_url.rstrip("/"))

    @classmethod
    def from_env(cls, api_key_env: str = API_KEY_ENV) -> ClientConfig:
        """Load configuration from environment variables.

        Args:
            api_key_env: Name of the variable holding the API key.

        Raises:
            ConfigurationError: If the API key variable is unset or empty.
        """
        timeout = os.getenv("ELEVENLABS_TIMEOUT")
        return cls(
            api_key=os.getenv(api_key_env, ""),
            base_url=os.getenv("ELEVENLABS_BASE_URL", DEFAULT_BASE_URL),
            ws_base_url=os.getenv("ELEVENLABS_WS_BASE_URL", DEFAULT_WS_BASE_URL),
            timeout=float(timeout) if timeout else 120.0,
        )


@dataclass(frozen=True)
class SessionOptions:
    """Tuning knobs for a conversational session."""

    # Seconds to wait for the conversation initiation metadata
    handshake_timeout: float = 10.0

    # Undelivered server messages tolerated before the session fails
    event_buffer_size: int = 256

    # Answer server pings automatically
    auto_pong: bool = True

    # Drop tool results whose call id is not outstanding (instead of forwarding)
    strict_tool_results: bool = False

    def __post_init__(self) -> None:
        if self.event_buffer_size < 1:
            raise ConfigurationError("event_buffer_size must be at least 1")
        if self.handshake_timeout <= 0:
            raise ConfigurationError("handshake_timeout must be positive")
