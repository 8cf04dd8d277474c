"""MCP server exposing the shop tools over JSON-RPC, plus the chat endpoint."""

import json
import os
import time
import uuid
from typing import Any, Dict, Optional, Union

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .client import MCPClient
from .config import load_config
from .logging_config import get_logger, setup_chat_logging
from .models import (
    CallToolRequest, InitializeResult, ListToolsResult, MCPError, MCPErrorCode,
    MCPRequest, MCPResponse, ServerInfo, ToolCall, FunctionCall
)
from .shop_tools import create_shop_tools
from .store import ShopStore

SERVER_NAME = "chat-mcp-server"
SERVER_VERSION = "0.1.0"
PROTOCOL_VERSION = "2024-11-05"
CONFIG_ENV = "CHAT_MCP_CONFIG"

GREETING = (
    "Hello! I'm your shop assistant. I can help you find products, add items "
    "to your cart, and check your cart status. What would you like to do today?"
)


class MCPServer:
    """Chat MCP server."""

    def __init__(self, config_path: Optional[str] = None):
        self.config = load_config(config_path)

        setup_chat_logging(self.config.to_dict())
        self.logger = get_logger("mcp_server")

        self.app = FastAPI(title="Chat MCP Server", version=SERVER_VERSION)
        self.store = ShopStore()
        self.client = MCPClient(strict=self.config.strict_schemas)
        for tool in create_shop_tools(self.store):
            self.client.register_tool(tool)
        self.setup_routes()
        self.logger.info(f"MCP Server initialized with {len(self.client.get_tools())} tools")

    def setup_routes(self):
        """Setup FastAPI routes."""

        @self.app.post("/")
        async def handle_mcp_request(request: Request):
            """Handle MCP JSON-RPC requests."""
            try:
                body = await request.json()
            except ValueError as e:
                response = self._create_error_response(None, MCPErrorCode.ParseError, f"Parse error: {e}")
                return JSONResponse(content=response.model_dump(exclude_none=True))

            request_id = body.get("id") if isinstance(body, dict) else None
            if isinstance(request_id, bool) or not isinstance(request_id, (str, int)):
                request_id = None
            try:
                mcp_request = MCPRequest(**body) if isinstance(body, dict) else MCPRequest.model_validate(body)
            except ValidationError as e:
                response = self._create_error_response(
                    request_id, MCPErrorCode.InvalidRequest, f"Invalid request: {e.error_count()} validation error(s)"
                )
                return JSONResponse(content=response.model_dump(exclude_none=True))

            try:
                if mcp_request.method == "initialize":
                    result = self._handle_initialize(mcp_request)
                elif mcp_request.method == "tools/list":
                    result = self._handle_list_tools(mcp_request)
                elif mcp_request.method == "tools/call":
                    result = await self._handle_call_tool(mcp_request)
                else:
                    result = self._create_error_response(
                        mcp_request.id, MCPErrorCode.MethodNotFound, f"Method not found: {mcp_request.method}"
                    )
            except Exception as e:
                self.logger.exception(f"Internal error handling {mcp_request.method}")
                result = self._create_error_response(
                    mcp_request.id, MCPErrorCode.InternalError, f"Internal error: {str(e)}"
                )

            return JSONResponse(content=result.model_dump(exclude_none=True))

        @self.app.post("/api/chat")
        async def handle_chat(request: Request):
            """Canned chat completion, or a proxy when a backend is configured."""
            try:
                body = await request.json()
            except ValueError as e:
                self.logger.error(f"Chat API error: {e}")
                return JSONResponse(
                    status_code=500,
                    content={"error": "Internal Server Error", "message": "Failed to process chat request"},
                )

            if self.config.chat.backend_url:
                return await self._proxy_chat(body)

            self.logger.debug(f"Received chat request: {body}")
            return JSONResponse(content=self._canned_completion())

    def _canned_completion(self) -> Dict[str, Any]:
        return {
            "id": f"msg_{uuid.uuid4().hex}",
            "object": "chat.completion",
            "created": int(time.time()),
            "model": self.config.chat.model,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": GREETING},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
        }

    async def _proxy_chat(self, body: Any) -> JSONResponse:
        url = f"{self.config.chat.backend_url.rstrip('/')}/api/chat"
        try:
            async with httpx.AsyncClient(timeout=self.config.chat.timeout) as http:
                response = await http.post(url, json=body)
                response.raise_for_status()
                return JSONResponse(content=response.json())
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error(f"Chat proxy error: {e}")
            return JSONResponse(
                status_code=500,
                content={"error": "Proxy Error", "message": "Failed to connect to chat backend"},
            )

    def _handle_initialize(self, request: MCPRequest) -> MCPResponse:
        """Handle initialize method."""
        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities={
                "tools": {}
            },
            serverInfo=ServerInfo(
                name=SERVER_NAME,
                version=SERVER_VERSION
            )
        )

        return self.client.create_response(request.id, result=result.model_dump())

    def _handle_list_tools(self, request: MCPRequest) -> MCPResponse:
        """Handle tools/list method."""
        result = ListToolsResult(tools=[tool.definition() for tool in self.client.get_tools()])

        return self.client.create_response(request.id, result=result.model_dump())

    async def _handle_call_tool(self, request: MCPRequest) -> MCPResponse:
        """Handle tools/call method."""
        if not request.params:
            return self._create_error_response(
                request.id, MCPErrorCode.InvalidParams, "Missing params for tools/call"
            )

        try:
            tool_request = CallToolRequest(**request.params)
        except ValidationError as e:
            return self._create_error_response(
                request.id, MCPErrorCode.InvalidParams, f"Invalid tool call: {e.error_count()} validation error(s)"
            )

        arguments = tool_request.arguments
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)

        tool_call = ToolCall(
            id=str(request.id if request.id is not None else uuid.uuid4()),
            function=FunctionCall(name=tool_request.name, arguments=arguments),
        )
        result = await self.client.execute_tool_call(tool_call)

        return self.client.create_response(request.id, result=result.to_wire())

    def _create_error_response(
        self, request_id: Optional[Union[str, int]], code: int, message: str
    ) -> MCPResponse:
        """Create an error response."""
        return self.client.create_response(request_id, error=MCPError(code=code, message=message))


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """Create and return the FastAPI app.

    Without an explicit path, the ``CHAT_MCP_CONFIG`` environment variable is used.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV)
    server = MCPServer(config_path)
    return server.app
