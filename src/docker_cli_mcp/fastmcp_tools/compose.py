"""FastMCP Docker Compose tools: up, down, ps and logs.

All compose commands share the prefix ``compose [-f FILE] [-p PROJECT]``;
the compose sub-command and its own flags follow.
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.common import (
    DESC_COMPOSE_FILE,
    DESC_COMPOSE_PROJECT,
    DESC_TAIL,
    DESC_TIMESTAMPS,
    ToolTuple,
    text_or_placeholder,
)
from docker_cli_mcp.fastmcp_tools.filters import register_tools_with_filtering
from docker_cli_mcp.utils.logger import get_logger
from docker_cli_mcp.utils.messages import (
    COMPOSE_SERVICES_STARTED,
    COMPOSE_SERVICES_STOPPED,
    NO_COMPOSE_SERVICES_FOUND,
    NO_LOGS_AVAILABLE,
)
from docker_cli_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

DESC_UP_DETACH = "Run in background (default: true)"
DESC_BUILD = "Build images before starting"
DESC_UP_SERVICES = "Specific services to start"
DESC_DOWN_VOLUMES = "Remove named volumes"
DESC_REMOVE_ORPHANS = "Remove containers for services not defined in the Compose file"
DESC_PS_ALL = "Show all stopped containers"
DESC_LOG_SERVICES = "Specific services to get logs from"


class ComposeProjectInput(BaseModel):
    """Options shared by every compose command."""

    file: str | None = Field(default=None, description=DESC_COMPOSE_FILE)
    project_name: str | None = Field(default=None, description=DESC_COMPOSE_PROJECT)


class ComposeUpInput(ComposeProjectInput):
    """Input for starting compose services."""

    detach: bool = Field(default=True, description=DESC_UP_DETACH)
    build: bool = Field(default=False, description=DESC_BUILD)
    services: list[str] | None = Field(default=None, description=DESC_UP_SERVICES)


class ComposeDownInput(ComposeProjectInput):
    """Input for stopping compose services."""

    volumes: bool = Field(default=False, description=DESC_DOWN_VOLUMES)
    remove_orphans: bool = Field(default=False, description=DESC_REMOVE_ORPHANS)


class ComposePsInput(ComposeProjectInput):
    """Input for listing compose services."""

    all: bool = Field(default=False, description=DESC_PS_ALL)


class ComposeLogsInput(ComposeProjectInput):
    """Input for fetching compose service logs."""

    services: list[str] | None = Field(default=None, description=DESC_LOG_SERVICES)
    tail: int | None = Field(default=None, ge=0, description=DESC_TAIL)
    timestamps: bool = Field(default=False, description=DESC_TIMESTAMPS)


def _compose_command(params: ComposeProjectInput, subcommand: str) -> CommandBuilder:
    """Start a compose command: ``compose [-f FILE] [-p PROJECT] SUBCOMMAND``."""
    return (
        CommandBuilder("compose")
        .option("-f", params.file)
        .option("-p", params.project_name)
        .subcommand(subcommand)
    )


def build_compose_up_command(params: ComposeUpInput) -> CommandSpec:
    """Lower compose_up input to ``compose ... up [-d] [--build] [SERVICE...]``."""
    return (
        _compose_command(params, "up")
        .flag("-d", params.detach)
        .flag("--build", params.build)
        .extend(params.services)
        .build()
    )


def build_compose_down_command(params: ComposeDownInput) -> CommandSpec:
    """Lower compose_down input to ``compose ... down [-v] [--remove-orphans]``."""
    return (
        _compose_command(params, "down")
        .flag("-v", params.volumes)
        .flag("--remove-orphans", params.remove_orphans)
        .build()
    )


def build_compose_ps_command(params: ComposePsInput) -> CommandSpec:
    """Lower compose_ps input to ``compose ... ps [-a] --format json``."""
    return _compose_command(params, "ps").flag("-a", params.all).option("--format", "json").build()


def build_compose_logs_command(params: ComposeLogsInput) -> CommandSpec:
    """Lower compose_logs input to ``compose ... logs [--tail N] [--timestamps] [SERVICE...]``."""
    return (
        _compose_command(params, "logs")
        .option("--tail", params.tail)
        .flag("--timestamps", params.timestamps)
        .extend(params.services)
        .build()
    )


def create_compose_up_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the compose_up FastMCP tool."""

    async def compose_up(
        file: Annotated[str | None, Field(description=DESC_COMPOSE_FILE)] = None,
        detach: Annotated[bool, Field(description=DESC_UP_DETACH)] = True,
        build: Annotated[bool, Field(description=DESC_BUILD)] = False,
        services: Annotated[list[str] | None, Field(description=DESC_UP_SERVICES)] = None,
        project_name: Annotated[str | None, Field(description=DESC_COMPOSE_PROJECT)] = None,
    ) -> str:
        """Create and start compose services."""
        params = ComposeUpInput(
            file=file,
            project_name=project_name,
            detach=detach,
            build=build,
            services=services,
        )
        logger.info(f"Starting compose services (file={file}, services={services})")
        output = await executor.execute_async(build_compose_up_command(params))
        return text_or_placeholder(output, COMPOSE_SERVICES_STARTED)

    return (
        "compose_up",
        "Create and start Docker Compose services",
        OperationSafety.MODERATE,
        True,
        True,  # may pull or build images
        compose_up,
    )


def create_compose_down_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the compose_down FastMCP tool."""

    async def compose_down(
        file: Annotated[str | None, Field(description=DESC_COMPOSE_FILE)] = None,
        volumes: Annotated[bool, Field(description=DESC_DOWN_VOLUMES)] = False,
        remove_orphans: Annotated[bool, Field(description=DESC_REMOVE_ORPHANS)] = False,
        project_name: Annotated[str | None, Field(description=DESC_COMPOSE_PROJECT)] = None,
    ) -> str:
        """Stop and remove compose services."""
        params = ComposeDownInput(
            file=file,
            project_name=project_name,
            volumes=volumes,
            remove_orphans=remove_orphans,
        )
        logger.info(f"Stopping compose services (file={file}, volumes={volumes})")
        output = await executor.execute_async(build_compose_down_command(params))
        return text_or_placeholder(output, COMPOSE_SERVICES_STOPPED)

    return (
        "compose_down",
        "Stop and remove Docker Compose services",
        OperationSafety.DESTRUCTIVE,
        True,
        False,
        compose_down,
    )


def create_compose_ps_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the compose_ps FastMCP tool."""

    async def compose_ps(
        file: Annotated[str | None, Field(description=DESC_COMPOSE_FILE)] = None,
        all: Annotated[bool, Field(description=DESC_PS_ALL)] = False,
        project_name: Annotated[str | None, Field(description=DESC_COMPOSE_PROJECT)] = None,
    ) -> str:
        """List compose service containers as JSON."""
        params = ComposePsInput(file=file, project_name=project_name, all=all)
        output = await executor.execute_async(build_compose_ps_command(params))
        return text_or_placeholder(output, NO_COMPOSE_SERVICES_FOUND)

    return (
        "compose_ps",
        "List Docker Compose service containers",
        OperationSafety.SAFE,
        True,
        False,
        compose_ps,
    )


def create_compose_logs_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the compose_logs FastMCP tool."""

    async def compose_logs(
        file: Annotated[str | None, Field(description=DESC_COMPOSE_FILE)] = None,
        services: Annotated[list[str] | None, Field(description=DESC_LOG_SERVICES)] = None,
        tail: Annotated[int | None, Field(ge=0, description=DESC_TAIL)] = None,
        timestamps: Annotated[bool, Field(description=DESC_TIMESTAMPS)] = False,
        project_name: Annotated[str | None, Field(description=DESC_COMPOSE_PROJECT)] = None,
    ) -> str:
        """Fetch logs from compose services."""
        params = ComposeLogsInput(
            file=file,
            project_name=project_name,
            services=services,
            tail=tail,
            timestamps=timestamps,
        )
        output = await executor.execute_async(build_compose_logs_command(params))
        return text_or_placeholder(output, NO_LOGS_AVAILABLE)

    return (
        "compose_logs",
        "Get logs from Docker Compose services",
        OperationSafety.SAFE,
        True,
        False,
        compose_logs,
    )


TOOL_FACTORIES = [
    create_compose_up_tool,
    create_compose_down_tool,
    create_compose_ps_tool,
    create_compose_logs_tool,
]


def register_compose_tools(
    app: Any,
    executor: DockerCliExecutor,
    safety_config: SafetyConfig | None = None,
) -> list[str]:
    """Register all compose tools with FastMCP.

    Args:
        app: FastMCP application instance
        executor: Shared container engine executor
        safety_config: Tool filtering configuration (None registers everything)

    Returns:
        List of registered tool names
    """
    tools = [factory(executor) for factory in TOOL_FACTORIES]
    return register_tools_with_filtering(app, tools, safety_config)
