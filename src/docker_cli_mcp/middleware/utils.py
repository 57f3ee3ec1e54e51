"""Helpers for naming the MCP operation a middleware context carries."""

from typing import Any

from fastmcp.server.middleware import MiddlewareContext

TOOL_CALL_PREFIX = "tool_call:"


def _tool_name(context: MiddlewareContext[Any]) -> str | None:
    """Return the tool name for tools/call messages, else None."""
    message = context.message
    if not hasattr(message, "arguments"):
        return None
    name = getattr(message, "name", None)
    return str(name) if name else None


def get_operation_type(context: MiddlewareContext[Any]) -> str:
    """Describe the operation for request logs.

    Tool calls read ``tool_call:<tool>``; protocol requests use their method
    (``tools/list``), falling back to the message class name.
    """
    tool_name = _tool_name(context)
    if tool_name:
        return TOOL_CALL_PREFIX + tool_name

    method = getattr(context, "method", None)
    if method:
        return str(method)

    message_type = type(context.message).__name__
    return "mcp_protocol" if message_type in ("object", "dict") else message_type


def get_operation_name(context: MiddlewareContext[Any]) -> str:
    """Short operation name for error messages: the bare tool name, or the method."""
    return get_operation_type(context).removeprefix(TOOL_CALL_PREFIX)
