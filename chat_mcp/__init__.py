"""Chat MCP: tool registry, tool-call dispatch and a demo shop server."""

from .client import MCPClient
from .events import EventBus, EventName
from .models import MCPError, MCPErrorCode, Tool, ToolCall, ToolResult
from .validation import SchemaError, validate_params

__version__ = "0.1.0"

__all__ = [
    "EventBus",
    "EventName",
    "MCPClient",
    "MCPError",
    "MCPErrorCode",
    "SchemaError",
    "Tool",
    "ToolCall",
    "ToolResult",
    "validate_params",
]
