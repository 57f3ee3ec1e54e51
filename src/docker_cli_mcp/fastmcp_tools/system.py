"""FastMCP system tools: volume and network listing, engine info and system prune."""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.common import ToolTuple, text_or_placeholder
from docker_cli_mcp.fastmcp_tools.filters import register_tools_with_filtering
from docker_cli_mcp.utils.logger import get_logger
from docker_cli_mcp.utils.messages import (
    NO_NETWORKS_FOUND,
    NO_SYSTEM_INFO,
    NO_VOLUMES_FOUND,
    NOTHING_TO_PRUNE,
)
from docker_cli_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

DESC_PRUNE_ALL = "Remove all unused images, not just dangling ones"
DESC_PRUNE_VOLUMES = "Prune volumes"
DESC_PRUNE_FORCE = "Do not prompt for confirmation (default: true)"


class SystemPruneInput(BaseModel):
    """Input for pruning unused engine data."""

    all: bool = Field(default=False, description=DESC_PRUNE_ALL)
    volumes: bool = Field(default=False, description=DESC_PRUNE_VOLUMES)
    force: bool = Field(default=True, description=DESC_PRUNE_FORCE)


def build_list_volumes_command() -> CommandSpec:
    """Lower list_volumes to ``volume ls --format json``."""
    return CommandBuilder("volume", "ls").option("--format", "json").build()


def build_list_networks_command() -> CommandSpec:
    """Lower list_networks to ``network ls --format json``."""
    return CommandBuilder("network", "ls").option("--format", "json").build()


def build_system_info_command() -> CommandSpec:
    """Lower system_info to ``info --format json``."""
    return CommandBuilder("info").option("--format", "json").build()


def build_system_prune_command(params: SystemPruneInput) -> CommandSpec:
    """Lower system_prune input to ``system prune [-a] [--volumes] [-f]``.

    Without ``-f`` the engine prompts for confirmation on stdin.
    """
    return (
        CommandBuilder("system", "prune")
        .flag("-a", params.all)
        .flag("--volumes", params.volumes)
        .flag("-f", params.force)
        .build()
    )


def create_list_volumes_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the list_volumes FastMCP tool."""

    async def list_volumes() -> str:
        """List Docker volumes as JSON lines."""
        output = await executor.execute_async(build_list_volumes_command())
        return text_or_placeholder(output, NO_VOLUMES_FOUND)

    return (
        "list_volumes",
        "List Docker volumes",
        OperationSafety.SAFE,
        True,
        False,
        list_volumes,
    )


def create_list_networks_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the list_networks FastMCP tool."""

    async def list_networks() -> str:
        """List Docker networks as JSON lines."""
        output = await executor.execute_async(build_list_networks_command())
        return text_or_placeholder(output, NO_NETWORKS_FOUND)

    return (
        "list_networks",
        "List Docker networks",
        OperationSafety.SAFE,
        True,
        False,
        list_networks,
    )


def create_system_info_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the system_info FastMCP tool."""

    async def system_info() -> str:
        """Return engine-wide information as JSON text."""
        output = await executor.execute_async(build_system_info_command())
        return text_or_placeholder(output, NO_SYSTEM_INFO)

    return (
        "system_info",
        "Get Docker system-wide information",
        OperationSafety.SAFE,
        True,
        False,
        system_info,
    )


def create_system_prune_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the system_prune FastMCP tool."""

    async def system_prune(
        all: Annotated[bool, Field(description=DESC_PRUNE_ALL)] = False,
        volumes: Annotated[bool, Field(description=DESC_PRUNE_VOLUMES)] = False,
        force: Annotated[bool, Field(description=DESC_PRUNE_FORCE)] = True,
    ) -> str:
        """Remove unused containers, networks, images and optionally volumes."""
        params = SystemPruneInput(all=all, volumes=volumes, force=force)
        logger.warning(f"Pruning Docker system (all={all}, volumes={volumes})")
        output = await executor.execute_async(build_system_prune_command(params))
        return text_or_placeholder(output, NOTHING_TO_PRUNE)

    return (
        "system_prune",
        "Remove unused Docker data (containers, networks, images, optionally volumes)",
        OperationSafety.DESTRUCTIVE,
        True,  # pruning twice removes nothing more
        False,
        system_prune,
    )


TOOL_FACTORIES = [
    create_list_volumes_tool,
    create_list_networks_tool,
    create_system_info_tool,
    create_system_prune_tool,
]


def register_system_tools(
    app: Any,
    executor: DockerCliExecutor,
    safety_config: SafetyConfig | None = None,
) -> list[str]:
    """Register all system tools with FastMCP.

    Args:
        app: FastMCP application instance
        executor: Shared container engine executor
        safety_config: Tool filtering configuration (None registers everything)

    Returns:
        List of registered tool names
    """
    tools = [factory(executor) for factory in TOOL_FACTORIES]
    return register_tools_with_filtering(app, tools, safety_config)
