"""Command-line entry point: ``docker-cli-mcp`` / ``python -m docker_cli_mcp``."""

import asyncio
import os
from enum import Enum
from pathlib import Path
from typing import Any

import typer

from docker_cli_mcp.config import Config
from docker_cli_mcp.server import DockerCliServer
from docker_cli_mcp.utils.logger import get_logger, setup_logger
from docker_cli_mcp.version import __version__

LOG_PATH_ENV = "MCP_DOCKER_CLI_LOG_PATH"
DEFAULT_LOG_FILE = "docker_cli_mcp.log"
LOCAL_HOSTS = ("127.0.0.1", "localhost", "::1")
SHUTDOWN_COMPLETE_MSG = "MCP server shutdown complete"


class Transport(str, Enum):
    """Supported transport types."""

    stdio = "stdio"
    http = "http"


def _run(server: DockerCliServer, logger: Any, **run_kwargs: Any) -> None:
    """Start the session, serve until the transport closes, then stop it."""
    asyncio.run(server.start())
    try:
        # FastMCP.run() owns its event loop
        server.get_app().run(**run_kwargs)
    finally:
        asyncio.run(server.stop())
        logger.info(SHUTDOWN_COMPLETE_MSG)


def run_stdio(logger: Any, server: DockerCliServer) -> None:
    """Serve MCP over stdin/stdout."""
    logger.info("Serving MCP over stdio")
    _run(server, logger, transport="stdio")


def run_http(host: str, port: int, logger: Any, server: DockerCliServer) -> None:
    """Serve MCP over streamable HTTP.

    Args:
        host: Interface to bind
        port: TCP port to bind
        logger: Logger instance
        server: Server session
    """
    logger.info(f"Serving MCP over HTTP on http://{host}:{port}")
    if host not in LOCAL_HOSTS:
        logger.warning(
            f"HTTP transport bound to {host} has no authentication: anyone who can reach it "
            "can run container engine commands. Bind to 127.0.0.1 or front it with an "
            "authenticating proxy."
        )
    _run(server, logger, transport="http", host=host, port=port)


app = typer.Typer(
    name="docker-cli-mcp",
    help="MCP server for the docker command-line program",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docker-cli-mcp {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(  # noqa: B008
    transport: Transport = typer.Option(Transport.stdio, "--transport", help="Transport type"),
    host: str = typer.Option("127.0.0.1", "--host", help="HTTP bind address"),
    port: int = typer.Option(8000, "--port", help="HTTP bind port"),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Run the Docker CLI MCP server."""
    config = Config()
    setup_logger(config.server, Path(os.getenv(LOG_PATH_ENV) or DEFAULT_LOG_FILE))

    logger = get_logger(__name__)
    logger.info(f"Docker CLI MCP Server v{__version__} ({transport.value} transport)")
    logger.info(f"Configuration: {config}")

    server = DockerCliServer(config)
    try:
        if transport is Transport.http:
            run_http(host, port, logger, server)
        else:
            run_stdio(logger, server)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        raise


if __name__ == "__main__":
    app()
