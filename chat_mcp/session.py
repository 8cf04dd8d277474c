"""Chat session: transcript, completion requests and local tool execution."""

import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .client import MCPClient
from .config import ChatConfig
from .events import EventName
from .models import ChatMessage, ChatState, Tool, ToolCall, ToolResult


def _message_to_wire(message: ChatMessage) -> Dict[str, Any]:
    wire: Dict[str, Any] = {"role": message.role, "content": message.content}
    if message.toolCalls:
        wire["tool_calls"] = [call.model_dump() for call in message.toolCalls]
    if message.toolCallId:
        wire["tool_call_id"] = message.toolCallId
    return wire


def _result_text(result: ToolResult) -> str:
    return "\n".join(block.text for block in result.content if block.text)


class ChatSession:
    """One chat conversation and the tool registry that serves it."""

    def __init__(
        self,
        config: Optional[ChatConfig] = None,
        tools: Optional[List[Tool]] = None,
        client: Optional[MCPClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        initial_messages: Optional[List[ChatMessage]] = None,
    ):
        self.config = config or ChatConfig()
        self.client = client or MCPClient()
        self.messages: List[ChatMessage] = list(initial_messages or [])
        self.is_loading = False
        self.error: Optional[str] = None
        self._http = http_client
        self.logger = logging.getLogger("chat_session")

        for tool in tools or []:
            self.client.register_tool(tool)

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def state(self) -> ChatState:
        return ChatState(
            messages=list(self.messages),
            isLoading=self.is_loading,
            error=self.error,
            tools=[tool.name for tool in self.client.get_tools()],
        )

    def _notify_state(self) -> None:
        self.client.emit(EventName.STATE_CHANGE, self.state)

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.client.emit(EventName.MESSAGE, message)

    def _request_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": self.config.model,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "messages": [_message_to_wire(m) for m in self.messages],
        }
        tools = self.client.export_for_invocation()
        if tools:
            body["tools"] = tools
        return body

    async def _complete(self) -> Dict[str, Any]:
        headers = {}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"

        response = await self._get_http_client().post(
            self.config.api_url, json=self._request_body(), headers=headers
        )
        response.raise_for_status()
        data = response.json()
        message = data["choices"][0]["message"]
        if not isinstance(message, dict):
            raise ValueError(f"Malformed completion message: {message!r}")
        return message

    async def send_message(self, text: str) -> Optional[ChatMessage]:
        """Send a user message and run any tool calls in the reply.

        Returns the assistant message, or None when the completion request
        failed; the failure is kept in ``error``.
        """
        self.error = None
        self._append(ChatMessage(id=str(uuid.uuid4()), role="user", content=text))
        self.is_loading = True
        self._notify_state()

        try:
            try:
                reply = await self._complete()
                tool_calls = [ToolCall.model_validate(tc) for tc in reply.get("tool_calls") or []]
                assistant = ChatMessage(
                    id=str(uuid.uuid4()),
                    role="assistant",
                    content=reply.get("content") or "",
                    toolCalls=tool_calls or None,
                )
            except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError, ValidationError) as e:
                self.logger.error(f"Chat completion failed: {e}")
                self.error = str(e) or type(e).__name__
                return None

            self._append(assistant)

            for tool_call in tool_calls:
                result = await self.client.execute_tool_call(tool_call)
                self._append(ChatMessage(
                    id=str(uuid.uuid4()),
                    role="tool",
                    content=_result_text(result),
                    toolCallId=tool_call.id,
                ))
            return assistant
        finally:
            self.is_loading = False
            self._notify_state()

    def clear_chat(self) -> None:
        self.messages = []
        self.error = None
        self._notify_state()
