"""Loguru setup for the server process.

stdout belongs to the stdio transport, so console records always go to stderr.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from docker_cli_mcp.config import ServerConfig

LOG_ROTATION = "10 MB"
LOG_RETENTION = "7 days"
LOG_COMPRESSION = "zip"


def _sink_options(config: ServerConfig) -> dict[str, Any]:
    """Options shared by the console and file sinks."""
    options: dict[str, Any] = {"level": config.log_level, "backtrace": True}
    if config.json_logging:
        # Serialized records never include variable values
        options.update(serialize=True, diagnose=False)
    else:
        options.update(format=config.log_format, diagnose=config.debug_mode)
    return options


def setup_logger(config: ServerConfig, log_file: Path | None = None) -> None:
    """Replace loguru's default handler with the configured sinks.

    Args:
        config: Server configuration (level, format, JSON and debug switches)
        log_file: Optional rotating log file; parent directories are created by loguru
    """
    logger.remove()
    options = _sink_options(config)

    logger.add(sys.stderr, colorize=not config.json_logging, **options)
    if log_file:
        logger.add(
            log_file,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            compression=LOG_COMPRESSION,
            **options,
        )

    logger.info(
        f"Logger initialized (level={config.log_level}, "
        f"json={'on' if config.json_logging else 'off'}, file={log_file or 'none'})"
    )


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Return the shared loguru logger; ``name`` is accepted for call-site symmetry."""
    return logger
