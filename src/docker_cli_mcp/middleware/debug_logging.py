"""Request/response tracing for MCP operations.

Enabled with ``MCP_DEBUG_MODE``. Each operation produces a request record
with its arguments and a response record with the outcome and elapsed time.
"""

import json
import time
from typing import Any

from fastmcp.server.middleware import CallNext, MiddlewareContext

from docker_cli_mcp.middleware.utils import get_operation_type
from docker_cli_mcp.utils.logger import get_logger

logger = get_logger(__name__)

MAX_ARGUMENTS_CHARS = 2000
MAX_RESULT_CHARS = 5000


class DebugLoggingMiddleware:
    """FastMCP middleware that traces requests and responses at DEBUG level."""

    def __init__(self, debug_enabled: bool = False) -> None:
        self._debug_enabled = debug_enabled
        logger.info(
            f"DebugLoggingMiddleware initialized "
            f"(request tracing {'ENABLED' if debug_enabled else 'disabled'})"
        )

    def _truncate_if_needed(self, data: Any, max_length: int = MAX_RESULT_CHARS) -> str:
        """Render data for the log, cutting it at ``max_length`` characters.

        Dicts and lists are rendered as indented JSON when serializable.
        """
        text = str(data)
        if isinstance(data, (dict, list)):
            try:
                text = json.dumps(data, indent=2)
            except (TypeError, ValueError):
                pass

        if len(text) <= max_length:
            return text
        return f"{text[:max_length]}\n... (truncated, {len(text)} total chars)"

    async def __call__(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Any],
    ) -> Any:
        if not self._debug_enabled:
            return await call_next(context)

        operation = get_operation_type(context)
        arguments = getattr(context.message, "arguments", None)
        logger.debug(f"MCP Request: {operation}")
        if arguments:
            logger.debug(
                f"Arguments:\n{self._truncate_if_needed(arguments, MAX_ARGUMENTS_CHARS)}"
            )

        started = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug(
                f"MCP Response: {operation} - ERROR after {elapsed_ms:.1f} ms "
                f"({type(e).__name__}: {e})"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"MCP Response: {operation} - SUCCESS after {elapsed_ms:.1f} ms")
        logger.debug(f"Result:\n{self._truncate_if_needed(result)}")
        return result
