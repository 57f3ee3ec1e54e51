"""Shared pieces for FastMCP tool modules."""

from collections.abc import Callable
from typing import Any

from docker_cli_mcp.utils.safety import OperationSafety

# Tool tuple: (name, description, safety_level, idempotent, open_world, function)
ToolTuple = tuple[str, str, OperationSafety, bool, bool, Callable[..., Any]]

# Common field descriptions
DESC_CONTAINER = "Container ID or name"
DESC_COMPOSE_FILE = "Path to compose file (default: docker-compose.yml)"
DESC_COMPOSE_PROJECT = "Compose project name (default: derived from the project directory)"
DESC_TAIL = "Number of lines to show from the end of the logs"
DESC_TIMESTAMPS = "Show timestamps"
DESC_STOP_TIME = "Seconds to wait before killing the container"


def text_or_placeholder(output: str, placeholder: str) -> str:
    """Return engine output, or the placeholder when it is empty or only whitespace."""
    return output if output.strip() else placeholder
