"""Tool registry and tool-call dispatcher."""

import inspect
import json
import logging
from typing import Any, Dict, List, Optional, Union

from .events import EventBus, EventHandler, EventName
from .models import (
    MCPError, MCPErrorCode, MCPNotification, MCPRequest, MCPResponse,
    Tool, ToolCall, ToolResult
)
from .validation import check_schema, validate_params


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


class MCPClient:
    """Registry of local tools with JSON-RPC style dispatch.

    One instance belongs to one chat session. Nothing here is safe for
    concurrent mutation from several threads.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.events = EventBus()
        self._tools: Dict[str, Tool] = {}
        self._request_id = 0
        self.logger = logging.getLogger("mcp_client")

    # Registry

    def register_tool(self, tool: Tool) -> None:
        """Register a tool, replacing any tool with the same name."""
        if self.strict:
            check_schema(tool.inputSchema)
        if tool.name in self._tools:
            self.logger.debug(f"Replacing tool: {tool.name}")
        self._tools[tool.name] = tool

    def unregister_tool(self, tool_name: str) -> None:
        """Remove a tool; unknown names are ignored."""
        self._tools.pop(tool_name, None)

    def get_tool(self, tool_name: str) -> Optional[Tool]:
        return self._tools.get(tool_name)

    def get_tools(self) -> List[Tool]:
        """Return all registered tools in registration order."""
        return list(self._tools.values())

    def clear_tools(self) -> None:
        self._tools.clear()

    def export_for_invocation(self) -> List[Dict[str, Any]]:
        """Describe registered tools in OpenAI function-calling format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.inputSchema.model_dump(exclude_none=True),
                },
            }
            for tool in self._tools.values()
        ]

    # Dispatch

    def _fail(self, error: MCPError) -> ToolResult:
        self.logger.warning(f"Tool call failed ({error.code}): {error.message}")
        self.events.emit(EventName.ERROR, error)
        return ToolResult.from_error(error)

    async def execute_tool_call(self, tool_call: ToolCall) -> ToolResult:
        """Execute a tool call end to end.

        Failures are reported on the ``error`` event and returned as an
        error-flagged result; this method does not raise.
        """
        tool = self._tools.get(tool_call.name)
        if tool is None:
            return self._fail(MCPError(
                code=MCPErrorCode.MethodNotFound,
                message=f"Tool '{tool_call.name}' not found",
            ))

        try:
            params = json.loads(tool_call.arguments, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as e:
            return self._fail(MCPError(
                code=MCPErrorCode.InvalidParams,
                message="Invalid JSON in tool arguments",
                data=str(e),
            ))

        if not isinstance(params, dict):
            return self._fail(MCPError(
                code=MCPErrorCode.InvalidParams,
                message="Tool arguments must be a JSON object",
            ))

        validation_error = validate_params(params, tool.inputSchema)
        if validation_error is not None:
            return self._fail(validation_error)

        self.events.emit(EventName.TOOL_CALL, tool_call)
        self.logger.info(f"Invoking tool: {tool.name}")

        try:
            if tool.handler is None:
                raise RuntimeError(f"Tool '{tool.name}' has no handler")
            outcome = tool.handler(params)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            result = outcome if isinstance(outcome, ToolResult) else ToolResult.model_validate(outcome)
        except Exception as e:
            self.logger.exception(f"Tool '{tool.name}' raised")
            return self._fail(MCPError(
                code=MCPErrorCode.ToolExecutionError,
                message=f"Tool execution failed: {str(e) or type(e).__name__}",
                data={"type": type(e).__name__, "message": str(e)},
            ))

        self.events.emit(EventName.TOOL_RESULT, result)
        return result

    # Envelopes

    def create_request(self, method: str, params: Optional[Dict[str, Any]] = None) -> MCPRequest:
        """Create a JSON-RPC request with the next request id."""
        self._request_id += 1
        return MCPRequest(id=self._request_id, method=method, params=params)

    def create_response(
        self,
        request_id: Union[str, int],
        result: Optional[Dict[str, Any]] = None,
        error: Optional[MCPError] = None,
    ) -> MCPResponse:
        """Create a JSON-RPC response echoing ``request_id``."""
        return MCPResponse(id=request_id, result=result, error=error)

    def create_notification(self, method: str, params: Optional[Dict[str, Any]] = None) -> MCPNotification:
        return MCPNotification(method=method, params=params)

    # Events

    def on(self, event_name: Union[EventName, str], handler: EventHandler) -> None:
        self.events.on(event_name, handler)

    def off(self, event_name: Union[EventName, str], handler: EventHandler) -> None:
        self.events.off(event_name, handler)

    def emit(self, event_name: Union[EventName, str], *payload: Any) -> None:
        self.events.emit(event_name, *payload)

    def clear_event_listeners(self) -> None:
        self.events.clear()
