"""Conversational AI agent endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import BaseEndpoint
from .schemas import AccessLevel, PageQuery, ResponseModel, StatusResponse


class AgentSummary(ResponseModel):
    agent_id: str
    name: str
    created_at_unix_secs: int | None = None
    access_level: AccessLevel | None = None


class AgentsPage(ResponseModel):
    agents: list[AgentSummary]
    has_more: bool = False
    next_cursor: str | None = None


class AgentMetadata(ResponseModel):
    created_at_unix_secs: int | None = None


class Agent(ResponseModel):
    """Full agent definition.

    ``conversation_config`` and ``platform_settings`` are kept as plain
    mappings; their schema is large and changes often.
    """

    agent_id: str
    name: str
    conversation_config: dict[str, Any] = {}
    platform_settings: dict[str, Any] | None = None
    metadata: AgentMetadata | None = None


class AgentsQuery(PageQuery):
    search: str | None = None


@dataclass
class GetAgents(BaseEndpoint[AgentsPage]):
    PATH = "/v1/convai/agents"
    response_model = AgentsPage

    query: AgentsQuery | None = None

    def query_params(self) -> dict[str, Any] | None:
        return self.query.to_params() if self.query else None


@dataclass
class GetAgent(BaseEndpoint[Agent]):
    PATH = "/v1/convai/agents/:agent_id"
    response_model = Agent

    agent_id: str

    def path_params(self) -> dict[str, str]:
        return {"agent_id": self.agent_id}


@dataclass
class DeleteAgent(BaseEndpoint[StatusResponse]):
    METHOD = "DELETE"
    PATH = "/v1/convai/agents/:agent_id"
    response_model = StatusResponse

    agent_id: str

    def path_params(self) -> dict[str, str]:
        return {"agent_id": self.agent_id}
