"""FastMCP application factory and tool annotation mapping."""

from typing import Any

from fastmcp import FastMCP

from docker_cli_mcp.utils.safety import OperationSafety
from docker_cli_mcp.version import __version__


def create_fastmcp_app(name: str = "docker-cli-mcp", version: str = __version__) -> FastMCP:
    """Create the FastMCP application; clients see ``name`` and ``version`` at initialize."""
    return FastMCP(name=name, version=version)


def get_mcp_annotations(
    safety_level: OperationSafety,
    idempotent: bool,
    open_world: bool,
) -> dict[str, Any]:
    """Translate a tool's safety classification into MCP annotation hints.

    The hints are advisory for clients; the server enforces nothing from them.

    Example:
        >>> get_mcp_annotations(OperationSafety.DESTRUCTIVE, False, False)["destructiveHint"]
        True
    """
    return {
        "readOnlyHint": safety_level is OperationSafety.SAFE,
        "destructiveHint": safety_level is OperationSafety.DESTRUCTIVE,
        "idempotentHint": idempotent,
        "openWorldHint": open_world,
    }
