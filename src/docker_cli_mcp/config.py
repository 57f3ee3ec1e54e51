"""Configuration for the Docker CLI MCP server.

Three pydantic-settings sections, each read from its own environment prefix
and from an optional ``.env`` file:

- ``DOCKER_CLI_*``: which engine binary to run
- ``SAFETY_*``: which tools to expose
- ``MCP_*``: server identity, logging and debug switches
"""

import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docker_cli_mcp.version import __version__

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def _settings(prefix: str) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def _parse_comma_separated_list(value: str | list[str] | None) -> list[str]:
    """Normalize a tool list given as a list, a JSON array or comma-separated text.

    Blank entries are dropped, so ``None``, ``""`` and ``"[]"`` all mean "no tools".
    Text that looks like a JSON array but does not parse is split on commas.
    """
    if not value:
        return []
    if isinstance(value, str):
        text = value.strip()
        items: list[str] | None = None
        if text.startswith("[") and text.endswith("]"):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None
            if isinstance(decoded, list):
                items = [str(item) for item in decoded]
        if items is None:
            items = text.split(",")
    else:
        items = list(value)
    return [item.strip() for item in items if item and item.strip()]


class DockerCliConfig(BaseSettings):
    """Container engine command-line settings."""

    model_config = _settings("DOCKER_CLI_")

    binary: str = Field(
        default="docker",
        description=(
            "Container engine executable, as a name on PATH or an absolute path. "
            "Any program that accepts the docker argument grammar works (e.g. 'podman')."
        ),
    )
    health_check: bool = Field(
        default=True,
        description="Run '<binary> version' at startup and log whether the engine answers",
    )

    @field_validator("binary")
    @classmethod
    def validate_binary(cls, binary: str) -> str:
        """Strip the binary name and reject blanks."""
        binary = binary.strip()
        if not binary:
            raise ValueError("Container engine binary must not be empty")
        return binary


class SafetyConfig(BaseSettings):
    """Which tools the server registers."""

    model_config = _settings("SAFETY_")

    # Declared as str | list[str] so pydantic-settings hands raw env text to the
    # validator instead of attempting (and failing) a JSON decode of it.
    allowed_tools: str | list[str] = Field(
        default_factory=list,
        description=(
            "Tool names to expose; empty exposes every tool. "
            "SAFETY_ALLOWED_TOOLS accepts 'a,b' or '[\"a\", \"b\"]'."
        ),
    )
    denied_tools: str | list[str] = Field(
        default_factory=list,
        description=(
            "Tool names to hide; wins over allowed_tools. "
            "Example: SAFETY_DENIED_TOOLS=system_prune,remove_image"
        ),
    )

    @field_validator("allowed_tools", "denied_tools", mode="before")
    @classmethod
    def parse_tool_list(cls, value: str | list[str] | None) -> list[str]:
        """Accept comma-separated text, a JSON array or a list."""
        return _parse_comma_separated_list(value)


class ServerConfig(BaseSettings):
    """MCP server identity, logging and debug settings."""

    model_config = _settings("MCP_")

    server_name: str = Field(default="docker-cli-mcp", description="Name reported to clients")
    server_version: str = Field(default=__version__, description="Version reported to clients")
    log_level: str = Field(default="INFO", description=f"One of {', '.join(LOG_LEVELS)}")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, description="loguru format string")
    json_logging: bool = Field(default=False, description="Serialize log records as JSON")
    debug_mode: bool = Field(
        default=False,
        description=(
            "Trace every request and response and stop sanitizing internal errors. "
            "Not for production use"
        ),
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Upper-case the level and reject unknown names."""
        normalized = level.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {', '.join(LOG_LEVELS)}")
        return normalized


class Config:
    """All configuration sections, loaded together at startup."""

    def __init__(self) -> None:
        self.docker = DockerCliConfig()
        self.safety = SafetyConfig()
        self.server = ServerConfig()

    def __repr__(self) -> str:
        return f"Config(docker={self.docker!r}, safety={self.safety!r}, server={self.server!r})"
