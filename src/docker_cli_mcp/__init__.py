"""Docker CLI MCP server.

Exposes container, image, volume, network and compose operations as MCP tools
backed by the ``docker`` command-line program.
"""

from docker_cli_mcp.version import __version__

__all__ = ["__version__"]
