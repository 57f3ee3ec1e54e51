"""MCP server session."""

from docker_cli_mcp.server.server import DockerCliServer

__all__ = ["DockerCliServer"]
