"""Pytest configuration and shared fixtures."""

import json

import pytest

from chat_mcp.client import MCPClient
from chat_mcp.models import FunctionCall, InputSchema, Tool, ToolCall, ToolResult


def make_call(name, arguments="{}", call_id="call_1"):
    """Build a ToolCall; dict arguments are JSON-encoded."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return ToolCall(id=call_id, function=FunctionCall(name=name, arguments=arguments))


@pytest.fixture
def client():
    """A fresh MCPClient."""
    return MCPClient()


@pytest.fixture
def add_to_cart_calls():
    """Parameters received by the add_to_cart handler."""
    return []


@pytest.fixture
def add_to_cart_tool(add_to_cart_calls):
    """Tool requiring a numeric productId."""
    async def handler(params):
        add_to_cart_calls.append(params)
        return ToolResult.text(f"Added product {params['productId']}")

    return Tool(
        name="add_to_cart",
        description="Add a product to the shopping cart",
        inputSchema=InputSchema(
            properties={
                "productId": {"type": "number", "description": "The ID of the product"},
                "quantity": {"type": "number"},
            },
            required=["productId"],
        ),
        handler=handler,
    )


@pytest.fixture
def sample_tool_definition():
    """Sample tool definition for testing."""
    return {
        "name": "test_tool",
        "description": "A test tool",
        "inputSchema": {
            "type": "object",
            "properties": {
                "param1": {"type": "string"},
                "param2": {"type": "number"}
            },
            "required": ["param1"]
        }
    }


@pytest.fixture
def sample_tool_call_request():
    """Sample tools/call JSON-RPC request."""
    return {
        "jsonrpc": "2.0",
        "id": 2,
        "method": "tools/call",
        "params": {
            "name": "get_products",
            "arguments": {"category": "kitchen"}
        }
    }
