from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

SERVER_NAME = "ARC Model Context Server"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Model Context Server for ARC framework"
PROTOCOL_VERSION = "1.0.0"
PROTOCOL_FORMAT = "json"


class ProtocolInfo(BaseModel):
    version: str = PROTOCOL_VERSION
    format: str = PROTOCOL_FORMAT


class ServerInfo(BaseModel):
    name: str = SERVER_NAME
    version: str = SERVER_VERSION
    description: str = SERVER_DESCRIPTION
    protocol: ProtocolInfo = Field(default_factory=ProtocolInfo)


class ToolSchema(BaseModel):
    """Serializable tool descriptor as returned by GET /mcp/tools."""

    id: str
    name: str
    description: str
    version: str
    group: str
    parameters: dict[str, Any]


class ToolListResponse(BaseModel):
    tools: list[ToolSchema]


class ErrorResponse(BaseModel):
    error: str
    code: str
    tool_id: str | None = None
    violations: list[str] | None = None


class ContextResponse(BaseModel):
    session_id: str
    state: dict[str, Any]


class ContextRemovedResponse(BaseModel):
    session_id: str
    removed: bool
