"""Attach every tool category to a FastMCP app."""

from typing import Any

from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.compose import register_compose_tools
from docker_cli_mcp.fastmcp_tools.container import register_container_tools
from docker_cli_mcp.fastmcp_tools.image import register_image_tools
from docker_cli_mcp.fastmcp_tools.system import register_system_tools
from docker_cli_mcp.utils.logger import get_logger

logger = get_logger(__name__)

CATEGORY_REGISTRARS = {
    "container": register_container_tools,
    "image": register_image_tools,
    "system": register_system_tools,
    "compose": register_compose_tools,
}


def register_all_tools(
    app: Any,
    executor: DockerCliExecutor,
    safety_config: SafetyConfig,
) -> dict[str, list[str]]:
    """Register the container, image, system and compose tools.

    All tools share one executor. Filtering by ``safety_config`` happens per tool.

    Returns:
        Registered tool names keyed by category, in registration order

    Example:
        >>> config = Config()
        >>> registered = register_all_tools(
        ...     create_fastmcp_app(), DockerCliExecutor(config.docker), config.safety
        ... )
        >>> registered["image"]
        ['list_images', 'pull_image', 'remove_image']
    """
    registered = {
        category: register(app, executor, safety_config)
        for category, register in CATEGORY_REGISTRARS.items()
    }

    total = sum(len(names) for names in registered.values())
    logger.info(f"Registered {total} tools across {len(registered)} categories")
    return registered
