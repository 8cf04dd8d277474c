"""Tool argument validation against declared input schemas."""

from typing import Any, Dict, Optional

from .models import PROPERTY_TYPES, InputSchema, MCPError, MCPErrorCode, json_kind


class SchemaError(ValueError):
    """Malformed tool input schema."""
    pass


def validate_params(params: Dict[str, Any], schema: InputSchema) -> Optional[MCPError]:
    """Validate parsed tool arguments against a tool's input schema.

    Checks stop at the first violation. Required parameters are checked in
    declared order, then every supplied parameter that the schema declares
    is checked for its JSON kind. Undeclared parameters are ignored, and
    ``enum``/``default`` are descriptive only.

    Args:
        params: Parsed arguments mapping
        schema: Tool input schema

    Returns:
        An ``InvalidParams`` error, or None when the arguments are acceptable
    """
    for required_param in schema.required:
        if required_param not in params:
            return MCPError(
                code=MCPErrorCode.InvalidParams,
                message=f"Missing required parameter: {required_param}",
            )

    for param_name, param_value in params.items():
        param_schema = schema.properties.get(param_name)
        if param_schema is None:
            continue

        expected_type = param_schema.type
        if expected_type not in PROPERTY_TYPES:
            continue

        if json_kind(param_value) != expected_type:
            if expected_type == "array":
                message = f"Parameter '{param_name}' must be an array"
            else:
                message = f"Parameter '{param_name}' must be of type {expected_type}"
            return MCPError(code=MCPErrorCode.InvalidParams, message=message)

    return None


def check_schema(schema: InputSchema) -> None:
    """Reject a malformed input schema (strict registration)."""
    for name, prop in schema.properties.items():
        if prop.type not in PROPERTY_TYPES:
            raise SchemaError(
                f"Property '{name}' has unsupported type '{prop.type}'; "
                f"expected one of {list(PROPERTY_TYPES)}"
            )
    for name in schema.required:
        if name not in schema.properties:
            raise SchemaError(f"Required parameter '{name}' is not declared in properties")
