"""MCP protocol models."""

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field


PROTOCOL_VERSION = "2024-11-05"


class MCPRequest(BaseModel):
    """JSON-RPC request or notification received from the host."""
    jsonrpc: str = "2.0"
    id: Optional[Union[str, int]] = None
    method: str
    params: Optional[Dict[str, Any]] = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class MCPResponse(BaseModel):
    """JSON-RPC response sent back to the host."""
    jsonrpc: str = "2.0"
    id: Optional[Union[str, int]] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Dump without the unused member of result/error, nor a null id."""
        return self.model_dump(exclude_none=True)


class ServerInfo(BaseModel):
    """Server information model."""
    name: str
    version: str


class InitializeResult(BaseModel):
    """Initialize method result."""
    protocolVersion: str = PROTOCOL_VERSION
    capabilities: Dict[str, Any]
    serverInfo: ServerInfo


class Tool(BaseModel):
    """Tool descriptor as advertised by tools/list."""
    name: str
    description: str
    inputSchema: Dict[str, Any]


class ListToolsResult(BaseModel):
    """List tools result."""
    tools: List[Tool]


class CallToolRequest(BaseModel):
    """Call tool request."""
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    """A single text block of a tool result."""
    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """Response envelope returned by every tool.

    ``isError`` is only set on failures; a successful envelope omits it.
    """
    content: List[TextContent]
    isError: Optional[bool] = None

    @classmethod
    def success(cls, text: str) -> "CallToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, text: str) -> "CallToolResult":
        return cls(content=[TextContent(text=text)], isError=True)

    @property
    def text(self) -> str:
        return self.content[0].text

    def to_envelope(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
