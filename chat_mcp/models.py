"""MCP protocol models."""

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MCPErrorCode(IntEnum):
    """JSON-RPC and MCP error codes."""
    ParseError = -32700
    InvalidRequest = -32600
    MethodNotFound = -32601
    InvalidParams = -32602
    InternalError = -32603
    ToolNotFound = -32001
    ToolExecutionError = -32002
    PermissionDenied = -32003


class MCPRequest(BaseModel):
    """MCP request model."""
    jsonrpc: str = "2.0"
    id: Optional[Union[str, int]] = None
    method: str
    params: Optional[Dict[str, Any]] = None


class MCPError(BaseModel):
    """MCP error model."""
    code: int
    message: str
    data: Optional[Any] = None


class MCPResponse(BaseModel):
    """MCP response model.

    ``result`` and ``error`` may both be set structurally; a response
    carrying both is malformed by convention.
    """
    jsonrpc: str = "2.0"
    id: Optional[Union[str, int]] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[MCPError] = None


class MCPNotification(BaseModel):
    """MCP notification model (a request without an id)."""
    jsonrpc: str = "2.0"
    method: str
    params: Optional[Dict[str, Any]] = None


class ServerInfo(BaseModel):
    """Server information model."""
    name: str
    version: str


class InitializeResult(BaseModel):
    """Initialize method result."""
    protocolVersion: str
    capabilities: Dict[str, Any]
    serverInfo: ServerInfo


PROPERTY_TYPES = ("string", "number", "boolean", "object", "array")


class ToolProperty(BaseModel):
    """Declared schema of a single tool parameter."""
    model_config = ConfigDict(extra="allow")

    type: str
    description: Optional[str] = None
    enum: Optional[List[Any]] = None
    default: Optional[Any] = None


class InputSchema(BaseModel):
    """Object-type input schema of a tool."""
    type: Literal["object"] = "object"
    properties: Dict[str, ToolProperty] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)


class ContentBlock(BaseModel):
    """One block of tool output."""
    type: Literal["text", "image", "resource"]
    text: Optional[str] = None
    data: Optional[str] = None
    mimeType: Optional[str] = None


class ToolResult(BaseModel):
    """Tool call result.

    ``error`` is only set when the dispatcher synthesised the result from a
    failure; it never leaves the process unless a caller asks for it.
    """
    content: List[ContentBlock]
    isError: bool = False
    error: Optional[MCPError] = Field(default=None, exclude=True)

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        """Build a result holding a single text block."""
        return cls(content=[ContentBlock(type="text", text=text)], isError=is_error)

    @classmethod
    def from_error(cls, error: MCPError) -> "ToolResult":
        """Build the error-flagged result that carries ``error.message``."""
        return cls(
            content=[ContentBlock(type="text", text=error.message)],
            isError=True,
            error=error,
        )

    def to_wire(self) -> Dict[str, Any]:
        """Serialise to the ToolResult wire shape."""
        return self.model_dump(exclude_none=True)


ToolHandler = Callable[[Dict[str, Any]], Union[ToolResult, Dict[str, Any], Awaitable[Any]]]


class Tool(BaseModel):
    """Tool definition model.

    The handler is local-only and excluded from serialisation.
    """
    name: str
    description: str
    inputSchema: InputSchema = Field(default_factory=InputSchema)
    handler: Optional[ToolHandler] = Field(default=None, exclude=True, repr=False)

    def definition(self) -> Dict[str, Any]:
        """Return the name/description/schema triple."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.inputSchema.model_dump(exclude_none=True),
        }


class ListToolsResult(BaseModel):
    """List tools result."""
    tools: List[Dict[str, Any]]


class FunctionCall(BaseModel):
    """Function part of a tool call; ``arguments`` is a JSON string."""
    name: str
    arguments: str = "{}"


class ToolCall(BaseModel):
    """Tool call as produced by a completion backend."""
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def arguments(self) -> str:
        return self.function.arguments


class CallToolRequest(BaseModel):
    """Call tool request."""
    name: str
    arguments: Union[Dict[str, Any], str] = Field(default_factory=dict)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """A chat transcript entry."""
    id: str
    role: Literal["user", "assistant", "system", "tool"]
    content: str
    toolCallId: Optional[str] = None
    toolCalls: Optional[List[ToolCall]] = None
    createdAt: datetime = Field(default_factory=_utcnow)


class ChatState(BaseModel):
    """Snapshot of a chat session."""
    messages: List[ChatMessage]
    isLoading: bool = False
    error: Optional[str] = None
    tools: List[str] = Field(default_factory=list)


def json_kind(value: Any) -> str:
    """Return the JSON kind of a parsed value.

    One of ``null``, ``boolean``, ``number``, ``string``, ``array`` or
    ``object``. Booleans are never numbers.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")
