"""FastMCP image tools: list, pull and remove."""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import SafetyConfig
from docker_cli_mcp.fastmcp_tools.common import ToolTuple, text_or_placeholder
from docker_cli_mcp.fastmcp_tools.filters import register_tools_with_filtering
from docker_cli_mcp.utils.logger import get_logger
from docker_cli_mcp.utils.messages import IMAGE_PULLED, IMAGE_REMOVED, NO_IMAGES_FOUND
from docker_cli_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

DESC_LIST_ALL = "Show all images (default hides intermediate images)"
DESC_PULL_IMAGE = "Image name (e.g., 'nginx:latest', 'ubuntu:22.04')"
DESC_IMAGE = "Image ID or name"
DESC_FORCE = "Force removal of the image"


class ListImagesInput(BaseModel):
    """Input for listing images."""

    all: bool = Field(default=False, description=DESC_LIST_ALL)


class PullImageInput(BaseModel):
    """Input for pulling an image."""

    image: str = Field(description=DESC_PULL_IMAGE)


class RemoveImageInput(BaseModel):
    """Input for removing an image."""

    image: str = Field(description=DESC_IMAGE)
    force: bool = Field(default=False, description=DESC_FORCE)


def build_list_images_command(params: ListImagesInput) -> CommandSpec:
    """Lower list_images input to ``images --format json [-a]``."""
    return CommandBuilder("images").option("--format", "json").flag("-a", params.all).build()


def build_pull_image_command(params: PullImageInput) -> CommandSpec:
    """Lower pull_image input to ``pull IMAGE``."""
    return CommandBuilder("pull").positional(params.image).build()


def build_remove_image_command(params: RemoveImageInput) -> CommandSpec:
    """Lower remove_image input to ``rmi [-f] IMAGE``."""
    return CommandBuilder("rmi").flag("-f", params.force).positional(params.image).build()


def create_list_images_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the list_images FastMCP tool."""

    async def list_images(
        all: Annotated[bool, Field(description=DESC_LIST_ALL)] = False,
    ) -> str:
        """List Docker images as JSON lines."""
        params = ListImagesInput(all=all)
        output = await executor.execute_async(build_list_images_command(params))
        return text_or_placeholder(output, NO_IMAGES_FOUND)

    return (
        "list_images",
        "List Docker images",
        OperationSafety.SAFE,
        True,
        False,
        list_images,
    )


def create_pull_image_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the pull_image FastMCP tool."""

    async def pull_image(
        image: Annotated[str, Field(description=DESC_PULL_IMAGE)],
    ) -> str:
        """Pull an image from a registry."""
        params = PullImageInput(image=image)
        logger.info(f"Pulling image {image}")
        output = await executor.execute_async(build_pull_image_command(params))
        return text_or_placeholder(output, IMAGE_PULLED.format(image))

    return (
        "pull_image",
        "Pull a Docker image from a registry",
        OperationSafety.MODERATE,
        True,
        True,  # talks to a registry
        pull_image,
    )


def create_remove_image_tool(executor: DockerCliExecutor) -> ToolTuple:
    """Create the remove_image FastMCP tool."""

    async def remove_image(
        image: Annotated[str, Field(description=DESC_IMAGE)],
        force: Annotated[bool, Field(description=DESC_FORCE)] = False,
    ) -> str:
        """Remove an image."""
        params = RemoveImageInput(image=image, force=force)
        await executor.execute_async(build_remove_image_command(params))
        logger.info(f"Removed image {image} (force={force})")
        return IMAGE_REMOVED.format(image)

    return (
        "remove_image",
        "Remove a Docker image",
        OperationSafety.DESTRUCTIVE,
        False,
        False,
        remove_image,
    )


TOOL_FACTORIES = [
    create_list_images_tool,
    create_pull_image_tool,
    create_remove_image_tool,
]


def register_image_tools(
    app: Any,
    executor: DockerCliExecutor,
    safety_config: SafetyConfig | None = None,
) -> list[str]:
    """Register all image tools with FastMCP.

    Args:
        app: FastMCP application instance
        executor: Shared container engine executor
        safety_config: Tool filtering configuration (None registers everything)

    Returns:
        List of registered tool names
    """
    tools = [factory(executor) for factory in TOOL_FACTORIES]
    return register_tools_with_filtering(app, tools, safety_config)
