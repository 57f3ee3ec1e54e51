"""FastMCP server session for the Docker CLI MCP server.

``DockerCliServer`` is constructed once at startup and owns the FastMCP app,
the command executor and the middleware chain.
"""

import asyncio

from fastmcp import FastMCP

from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import Config
from docker_cli_mcp.fastmcp_tools import register_all_tools
from docker_cli_mcp.middleware import DebugLoggingMiddleware, ErrorHandlerMiddleware
from docker_cli_mcp.utils.errors import DockerCliError
from docker_cli_mcp.utils.fastmcp_helpers import create_fastmcp_app
from docker_cli_mcp.utils.logger import get_logger

logger = get_logger(__name__)


class DockerCliServer:
    """FastMCP server exposing container engine CLI operations as tools."""

    def __init__(self, config: Config) -> None:
        """Initialize the server session.

        Args:
            config: Server configuration
        """
        self.config = config
        self.executor = DockerCliExecutor(config.docker)

        logger.info("Initializing Docker CLI MCP server")

        self.app = create_fastmcp_app(
            name=config.server.server_name, version=config.server.server_version
        )

        self.debug_middleware = DebugLoggingMiddleware(debug_enabled=config.server.debug_mode)
        self.error_middleware = ErrorHandlerMiddleware(debug_mode=config.server.debug_mode)

        # First added = outermost wrapper
        # NOTE: Middleware classes are protocol-compatible but don't inherit from base class
        self.app.add_middleware(self.debug_middleware)  # type: ignore[arg-type]
        self.app.add_middleware(self.error_middleware)  # type: ignore[arg-type]

        self.registered_tools = register_all_tools(self.app, self.executor, config.safety)
        total_tools = sum(len(tools) for tools in self.registered_tools.values())
        logger.info(f"Registered {total_tools} tools (engine binary: {self.executor.binary})")

    async def start(self) -> None:
        """Start the server and optionally check that the engine is reachable.

        A failed health check is logged, not raised: tool calls report their own failures.
        """
        logger.info("Starting Docker CLI MCP server")

        if not self.config.docker.health_check:
            return

        try:
            await asyncio.to_thread(self.executor.version)
            logger.info(f"Container engine '{self.executor.binary}' is reachable")
        except DockerCliError as e:
            logger.warning(f"Container engine health check failed: {e}")

    async def stop(self) -> None:
        """Stop the server."""
        logger.info("Stopping Docker CLI MCP server")

    def get_app(self) -> FastMCP:
        """Get the underlying FastMCP application.

        Returns:
            FastMCP application instance
        """
        return self.app
