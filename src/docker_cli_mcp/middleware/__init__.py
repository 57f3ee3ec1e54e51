"""FastMCP middleware for the Docker CLI MCP server."""

from docker_cli_mcp.middleware.debug_logging import DebugLoggingMiddleware
from docker_cli_mcp.middleware.error_handler import ErrorHandlerMiddleware

__all__ = [
    "DebugLoggingMiddleware",
    "ErrorHandlerMiddleware",
]
