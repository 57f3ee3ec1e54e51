"""FastMCP container tools.

Container listing, logs, lifecycle (start/stop/restart/remove), inspection,
exec and run. Each tool validates its parameters into an input model, lowers
the model into a ``CommandSpec`` and hands it to the shared executor.
"""

import shlex
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.common import (
    DESC_CONTAINER,
    DESC_STOP_TIME,
    DESC_TAIL,
    DESC_TIMESTAMPS,
    ToolTuple,
    text_or_placeholder,
)
from docker_cli_mcp.fastmcp_tools.filters import register_tools_with_filtering
from docker_cli_mcp.utils.logger import get_logger
from docker_cli_mcp.utils.messages import (
    CONTAINER_REMOVED,
    CONTAINER_RESTARTED,
    CONTAINER_RUN,
    CONTAINER_STARTED,
    CONTAINER_STOPPED,
    EXEC_NO_OUTPUT,
    NO_CONTAINERS_FOUND,
    NO_INSPECT_DATA,
    NO_LOGS_AVAILABLE,
)
from docker_cli_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

TABLE_FORMAT = "table {{.ID}}\t{{.Names}}\t{{.Image}}\t{{.Status}}\t{{.Ports}}"

DESC_LIST_ALL = "Show all containers (default shows just running)"
DESC_LIST_FORMAT = "Output format (default: json)"
DESC_SINCE = "Show logs since timestamp (e.g., '2024-01-01T00:00:00' or '10m')"
DESC_FORCE_RM = "Force removal of a running container"
DESC_RM_VOLUMES = "Remove anonymous volumes associated with the container"
DESC_EXEC_COMMAND = (
    "Command to execute. A string is run by 'sh -c' inside the container; "
    "a list is executed directly as an argument vector"
)
DESC_WORKDIR = "Working directory inside the container"
DESC_USER = "Username or UID"
DESC_RUN_IMAGE = "Image to run"
DESC_RUN_NAME = "Assign a name to the container"
DESC_DETACH = "Run container in background (default: true)"
DESC_PORTS = "Publish ports (e.g., ['8080:80', '443:443'])"
DESC_ENV = "Set environment variables (e.g., ['KEY=value'])"
DESC_VOLUMES = "Bind mount volumes (e.g., ['/host/path:/container/path'])"
DESC_NETWORK = "Connect to a network"
DESC_RUN_COMMAND = (
    "Command to run in the container. A string is split with shell quoting rules; "
    "a list is used as-is"
)
DESC_AUTO_REMOVE = "Automatically remove the container when it exits"

# Input Models


class ListContainersInput(BaseModel):
    """Input for listing containers."""

    all: bool = Field(default=False, description=DESC_LIST_ALL)
    format: Literal["table", "json"] = Field(default="json", description=DESC_LIST_FORMAT)


class ContainerLogsInput(BaseModel):
    """Input for fetching container logs."""

    container: str = Field(description=DESC_CONTAINER)
    tail: int | None = Field(default=None, ge=0, description=DESC_TAIL)
    since: str | None = Field(default=None, description=DESC_SINCE)
    timestamps: bool = Field(default=False, description=DESC_TIMESTAMPS)


class ContainerTargetInput(BaseModel):
    """Input for operations that only name a container (start, inspect)."""

    container: str = Field(description=DESC_CONTAINER)


class StopContainerInput(BaseModel):
    """Input for stopping or restarting a container."""

    container: str = Field(description=DESC_CONTAINER)
    time: int | None = Field(default=None, description=DESC_STOP_TIME)


class RemoveContainerInput(BaseModel):
    """Input for removing a container."""

    container: str = Field(description=DESC_CONTAINER)
    force: bool = Field(default=False, description=DESC_FORCE_RM)
    volumes: bool = Field(default=False, description=DESC_RM_VOLUMES)


class ExecInContainerInput(BaseModel):
    """Input for executing a command in a running container."""

    container: str = Field(description=DESC_CONTAINER)
    command: str | list[str] = Field(description=DESC_EXEC_COMMAND)
    workdir: str | None = Field(default=None, description=DESC_WORKDIR)
    user: str | None = Field(default=None, description=DESC_USER)

    @field_validator("command")
    @classmethod
    def require_command(cls, command: str | list[str]) -> str | list[str]:
        """Reject empty commands."""
        if isinstance(command, str) and not command.strip():
            raise ValueError("Command must not be empty")
        if isinstance(command, list) and not command:
            raise ValueError("Command argument list must not be empty")
        return command


class RunContainerInput(BaseModel):
    """Input for running a new container."""

    image: str = Field(description=DESC_RUN_IMAGE)
    name: str | None = Field(default=None, description=DESC_RUN_NAME)
    detach: bool = Field(default=True, description=DESC_DETACH)
    ports: list[str] | None = Field(default=None, description=DESC_PORTS)
    env: list[str] | None = Field(default=None, description=DESC_ENV)
    volumes: list[str] | None = Field(default=None, description=DESC_VOLUMES)
    network: str | None = Field(default=None, description=DESC_NETWORK)
    command: list[str] | None = Field(default=None, description=DESC_RUN_COMMAND)
    rm: bool = Field(default=False, description=DESC_AUTO_REMOVE)

    @field_validator("command", mode="before")
    @classmethod
    def split_command(cls, command: Any) -> Any:
        """Tokenize a command string with POSIX shell quoting rules.

        Unbalanced quotes raise ValueError, which pydantic reports as a validation error.
        """
        if isinstance(command, str):
            return shlex.split(command) or None
        return command


# Argument Lowering


def build_list_containers_command(params: ListContainersInput) -> CommandSpec:
    """Lower list_containers input to ``ps [-a] --format FORMAT``."""
    return (
        CommandBuilder("ps")
        .flag("-a", params.all)
        .option("--format", TABLE_FORMAT if params.format == "table" else "json")
        .build()
    )


def build_container_logs_command(params: ContainerLogsInput) -> CommandSpec:
    """Lower get_container_logs input to ``logs [--tail N] [--since S] [--timestamps] C``."""
    return (
        CommandBuilder("logs")
        .option("--tail", params.tail)
        .option("--since", params.since)
        .flag("--timestamps", params.timestamps)
        .positional(params.container)
        .build()
    )


def build_start_container_command(params: ContainerTargetInput) -> CommandSpec:
    """Lower start_container input to ``start C``."""
    return CommandBuilder("start").positional(params.container).build()


def build_stop_container_command(params: StopContainerInput) -> CommandSpec:
    """Lower stop_container input to ``stop [-t N] C``."""
    return CommandBuilder("stop").option("-t", params.time).positional(params.container).build()


def build_restart_container_command(params: StopContainerInput) -> CommandSpec:
    """Lower restart_container input to ``restart [-t N] C``."""
    return (
        CommandBuilder("restart").option("-t", params.time).positional(params.container).build()
    )


def build_remove_container_command(params: RemoveContainerInput) -> CommandSpec:
    """Lower remove_container input to ``rm [-f] [-v] C``."""
    return (
        CommandBuilder("rm")
        .flag("-f", params.force)
        .flag("-v", params.volumes)
        .positional(params.container)
        .build()
    )


def build_inspect_container_command(params: ContainerTargetInput) -> CommandSpec:
    """Lower inspect_container input to ``inspect C``."""
    return CommandBuilder("inspect").positional(params.container).build()


def build_exec_in_container_command(params: ExecInContainerInput) -> CommandSpec:
    """Lower exec_in_container input.

    A string command becomes ``exec [-w DIR] [-u USER] C sh -c COMMAND``; an argument
    list is appended after the container as-is.
    """
    builder = (
        CommandBuilder("exec")
        .option("-w", params.workdir)
        .option("-u", params.user)
        .positional(params.container)
    )
    if isinstance(params.command, str):
        builder.positional("sh", "-c", params.command)
    else:
        builder.extend(params.command)
    return builder.build()


def build_run_container_command(params: RunContainerInput) -> CommandSpec:
    """Lower run_container input.

    Flags come first, then the image, then the command tokens:
    ``run [-d] [--name N] [--rm] [--network NET] (-p P)* (-e E)* (-v V)* IMAGE [CMD...]``.
    """
    return (
        CommandBuilder("run")
        .flag("-d", params.detach)
        .option("--name", params.name)
        .flag("--rm", params.rm)
        .option("--network", params.network)
        .repeat("-p", params.ports)
        .repeat("-e", params.env)
        .repeat("-v", params.volumes)
        .positional(params.image)
        .extend(params.command)
        .build()
    )


# FastMCP Tool Functions


def create_list_containers_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the list_containers FastMCP tool."""

    async def list_containers(
        all: Annotated[bool, Field(description=DESC_LIST_ALL)] = False,
        format: Annotated[Literal["table", "json"], Field(description=DESC_LIST_FORMAT)] = "json",
    ) -> str:
        """List Docker containers."""
        params = ListContainersInput(all=all, format=format)
        logger.info(f"Listing containers (all={params.all}, format={params.format})")
        output = await executor.execute_async(build_list_containers_command(params))
        return text_or_placeholder(output, NO_CONTAINERS_FOUND)

    return (
        "list_containers",
        "List Docker containers (running only unless 'all' is set)",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_containers,
    )


def create_container_logs_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the get_container_logs FastMCP tool."""

    async def get_container_logs(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
        tail: Annotated[int | None, Field(ge=0, description=DESC_TAIL)] = None,
        since: Annotated[str | None, Field(description=DESC_SINCE)] = None,
        timestamps: Annotated[bool, Field(description=DESC_TIMESTAMPS)] = False,
    ) -> str:
        """Fetch logs from a container."""
        params = ContainerLogsInput(
            container=container, tail=tail, since=since, timestamps=timestamps
        )
        logger.info(f"Getting logs for container {container}")
        output = await executor.execute_async(build_container_logs_command(params))
        return text_or_placeholder(output, NO_LOGS_AVAILABLE)

    return (
        "get_container_logs",
        "Get logs from a Docker container",
        OperationSafety.SAFE,
        True,
        False,
        get_container_logs,
    )


def create_start_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the start_container FastMCP tool."""

    async def start_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
    ) -> str:
        """Start a stopped container."""
        params = ContainerTargetInput(container=container)
        await executor.execute_async(build_start_container_command(params))
        logger.info(f"Started container {container}")
        return CONTAINER_STARTED.format(container)

    return (
        "start_container",
        "Start a stopped Docker container",
        OperationSafety.MODERATE,
        True,  # starting a running container is a no-op
        False,
        start_container,
    )


def create_stop_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the stop_container FastMCP tool."""

    async def stop_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
        time: Annotated[int | None, Field(description=DESC_STOP_TIME)] = None,
    ) -> str:
        """Stop a running container."""
        params = StopContainerInput(container=container, time=time)
        await executor.execute_async(build_stop_container_command(params))
        logger.info(f"Stopped container {container}")
        return CONTAINER_STOPPED.format(container)

    return (
        "stop_container",
        "Stop a running Docker container",
        OperationSafety.MODERATE,
        True,
        False,
        stop_container,
    )


def create_restart_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the restart_container FastMCP tool."""

    async def restart_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
        time: Annotated[int | None, Field(description=DESC_STOP_TIME)] = None,
    ) -> str:
        """Restart a container."""
        params = StopContainerInput(container=container, time=time)
        await executor.execute_async(build_restart_container_command(params))
        logger.info(f"Restarted container {container}")
        return CONTAINER_RESTARTED.format(container)

    return (
        "restart_container",
        "Restart a Docker container",
        OperationSafety.MODERATE,
        False,  # not idempotent (each call restarts)
        False,
        restart_container,
    )


def create_remove_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the remove_container FastMCP tool."""

    async def remove_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
        force: Annotated[bool, Field(description=DESC_FORCE_RM)] = False,
        volumes: Annotated[bool, Field(description=DESC_RM_VOLUMES)] = False,
    ) -> str:
        """Remove a container."""
        params = RemoveContainerInput(container=container, force=force, volumes=volumes)
        await executor.execute_async(build_remove_container_command(params))
        logger.info(f"Removed container {container} (force={force}, volumes={volumes})")
        return CONTAINER_REMOVED.format(container)

    return (
        "remove_container",
        "Remove a Docker container",
        OperationSafety.DESTRUCTIVE,
        False,  # second call fails: container is gone
        False,
        remove_container,
    )


def create_inspect_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the inspect_container FastMCP tool."""

    async def inspect_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
    ) -> str:
        """Return low-level information about a container as JSON text."""
        params = ContainerTargetInput(container=container)
        output = await executor.execute_async(build_inspect_container_command(params))
        return text_or_placeholder(output, NO_INSPECT_DATA)

    return (
        "inspect_container",
        "Get detailed low-level information about a Docker container",
        OperationSafety.SAFE,
        True,
        False,
        inspect_container,
    )


def create_exec_in_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the exec_in_container FastMCP tool."""

    async def exec_in_container(
        container: Annotated[str, Field(description=DESC_CONTAINER)],
        command: Annotated[str | list[str], Field(description=DESC_EXEC_COMMAND)],
        workdir: Annotated[str | None, Field(description=DESC_WORKDIR)] = None,
        user: Annotated[str | None, Field(description=DESC_USER)] = None,
    ) -> str:
        """Execute a command inside a running container."""
        params = ExecInContainerInput(
            container=container, command=command, workdir=workdir, user=user
        )
        logger.info(f"Executing command in container {container}")
        output = await executor.execute_async(build_exec_in_container_command(params))
        return text_or_placeholder(output, EXEC_NO_OUTPUT)

    return (
        "exec_in_container",
        "Execute a command in a running Docker container",
        OperationSafety.MODERATE,
        False,
        False,
        exec_in_container,
    )


def create_run_container_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the run_container FastMCP tool."""

    async def run_container(  # noqa: PLR0913 - mirrors docker run options
        image: Annotated[str, Field(description=DESC_RUN_IMAGE)],
        name: Annotated[str | None, Field(description=DESC_RUN_NAME)] = None,
        detach: Annotated[bool, Field(description=DESC_DETACH)] = True,
        ports: Annotated[list[str] | None, Field(description=DESC_PORTS)] = None,
        env: Annotated[list[str] | None, Field(description=DESC_ENV)] = None,
        volumes: Annotated[list[str] | None, Field(description=DESC_VOLUMES)] = None,
        network: Annotated[str | None, Field(description=DESC_NETWORK)] = None,
        command: Annotated[str | list[str] | None, Field(description=DESC_RUN_COMMAND)] = None,
        rm: Annotated[bool, Field(description=DESC_AUTO_REMOVE)] = False,
    ) -> str:
        """Create and start a new container from an image."""
        params = RunContainerInput(
            image=image,
            name=name,
            detach=detach,
            ports=ports,
            env=env,
            volumes=volumes,
            network=network,
            command=command,
            rm=rm,
        )
        logger.info(f"Running container from image {image} (name={name}, detach={detach})")
        output = await executor.execute_async(build_run_container_command(params))
        return CONTAINER_RUN.format(output.strip())

    return (
        "run_container",
        "Run a new Docker container from an image",
        OperationSafety.MODERATE,
        False,
        True,  # may pull the image from a registry
        run_container,
    )


TOOL_FACTORIES = [
    create_list_containers_tool,
    create_container_logs_tool,
    create_start_container_tool,
    create_stop_container_tool,
    create_restart_container_tool,
    create_remove_container_tool,
    create_inspect_container_tool,
    create_exec_in_container_tool,
    create_run_container_tool,
]


def register_container_tools(
    app: Any,
    executor: DockerCliExecutor,
    safety_config: SafetyConfig | None = None,
) -> list[str]:
    """Register all container tools with FastMCP.

    Args:
        app: FastMCP application instance
        executor: Shared container engine executor
        safety_config: Tool filtering configuration (None registers everything)

    Returns:
        List of registered tool names
    """
    tools = [factory(executor) for factory in TOOL_FACTORIES]
    return register_tools_with_filtering(app, tools, safety_config)
