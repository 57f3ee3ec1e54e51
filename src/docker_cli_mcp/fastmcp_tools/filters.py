"""Allow/deny filtering applied while tools are attached to the app.

Kept apart from registration.py so tool modules can import it without a cycle.
"""

from typing import Any

from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.common import ToolTuple
from docker_cli_mcp.utils.fastmcp_helpers import get_mcp_annotations
from docker_cli_mcp.utils.logger import get_logger

logger = get_logger(__name__)


def should_register_tool(tool_name: str, safety_config: SafetyConfig) -> bool:
    """Decide whether a tool is exposed.

    The deny list always wins; a non-empty allow list exposes only its members.
    """
    if tool_name in safety_config.denied_tools:
        logger.debug(f"Tool {tool_name} is denied")
        return False
    if safety_config.allowed_tools and tool_name not in safety_config.allowed_tools:
        logger.debug(f"Tool {tool_name} is not in the allow list")
        return False
    return True


def register_tools_with_filtering(
    app: Any,
    tools: list[ToolTuple],
    safety_config: SafetyConfig | None,
) -> list[str]:
    """Attach each permitted tool to the app with its MCP annotations.

    Args:
        app: FastMCP application instance
        tools: Tool tuples produced by the ``create_*_tool`` factories
        safety_config: Allow/deny lists, or None to expose every tool

    Returns:
        Names of the tools that were registered, in input order
    """
    registered: list[str] = []

    for name, description, safety_level, idempotent, open_world, func in tools:
        if safety_config is not None and not should_register_tool(name, safety_config):
            continue

        app.tool(
            name=name,
            description=description,
            annotations=get_mcp_annotations(safety_level, idempotent, open_world),
        )(func)
        registered.append(name)
        logger.debug(f"Registered tool {name} ({safety_level.value})")

    return registered
