"""Custom exceptions for the Docker CLI MCP server.

All exceptions derive from FastMCP's ``ToolError`` so that their message is
returned to the client as-is instead of being wrapped or masked.
"""

from typing import TYPE_CHECKING

from fastmcp.exceptions import ToolError

if TYPE_CHECKING:
    from docker_cli_mcp.cli.command import CommandSpec


class DockerCliError(ToolError):
    """Base exception for all Docker CLI MCP errors."""


class CommandValidationError(DockerCliError):
    """Raised when a command token cannot be passed to a child process."""


class CommandExecutionError(DockerCliError):
    """Raised when the container engine command does not succeed."""


class CommandFailedError(CommandExecutionError):
    """Raised when the container engine exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        stderr: str = "",
        spec: "CommandSpec | None" = None,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr
        self.spec = spec


class CommandSpawnError(CommandExecutionError):
    """Raised when the container engine binary cannot be started."""
