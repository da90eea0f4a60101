"""Conversational AI knowledge base and tool endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import BaseEndpoint
from .schemas import AccessLevel, ResponseModel


class KnowledgeBaseDocument(ResponseModel):
    id: str
    name: str
    type: str
    extracted_inner_html: str | None = None
    access_level: AccessLevel | None = None


class DependentAgent(ResponseModel):
    id: str
    name: str
    type: str | None = None
    created_at_unix_secs: int | None = None
    access_level: AccessLevel | None = None


class Tool(ResponseModel):
    id: str
    tool_config: dict[str, Any]
    dependent_agents: list[DependentAgent] = []


class ToolsList(ResponseModel):
    tools: list[Tool]


@dataclass
class GetKnowledgeBase(BaseEndpoint[KnowledgeBaseDocument]):
    PATH = "/v1/convai/knowledge-base/:documentation_id"
    response_model = KnowledgeBaseDocument

    documentation_id: str

    def path_params(self) -> dict[str, str]:
        return {"documentation_id": self.documentation_id}


@dataclass
class ListTools(BaseEndpoint[ToolsList]):
    """List the tools available in the workspace."""

    PATH = "/v1/convai/tools"
    response_model = ToolsList


@dataclass
class GetTool(BaseEndpoint[Tool]):
    PATH = "/v1/convai/tools/:tool_id"
    response_model = Tool

    tool_id: str

    def path_params(self) -> dict[str, str]:
        return {"tool_id": self.tool_id}
