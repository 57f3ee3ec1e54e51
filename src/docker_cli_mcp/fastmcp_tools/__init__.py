"""FastMCP tool implementations.

Organization:
- container.py: container listing, logs, lifecycle, inspect, exec and run
- image.py: image listing, pull and removal
- system.py: volume/network listing, engine info and system prune
- compose.py: Docker Compose up, down, ps and logs
"""

from docker_cli_mcp.fastmcp_tools.registration import register_all_tools

__all__ = ["register_all_tools"]
