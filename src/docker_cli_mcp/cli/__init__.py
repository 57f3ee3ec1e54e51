"""Command lowering and execution for the container engine CLI."""

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.cli.executor import CommandResult, DockerCliExecutor

__all__ = ["CommandBuilder", "CommandSpec", "CommandResult", "DockerCliExecutor"]
