"""Error logging and sanitization for MCP operations.

Expected failures travel as ``ToolError`` (every ``DockerCliError`` is one, so
engine stderr reaches the client byte-for-byte) or as pydantic validation
errors; both are logged and re-raised untouched. Anything else is a bug in
the server, and its message is withheld from the client unless debug mode is on.
"""

from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import CallNext, MiddlewareContext
from pydantic import ValidationError

from docker_cli_mcp.middleware.utils import get_operation_name
from docker_cli_mcp.utils.errors import DockerCliError
from docker_cli_mcp.utils.logger import get_logger

logger = get_logger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred during '{}'"


class ErrorHandlerMiddleware:
    """FastMCP middleware that logs failures and hides unexpected error details."""

    def __init__(self, debug_mode: bool = False):
        """Initialize error handler middleware.

        Args:
            debug_mode: Re-raise unexpected errors unchanged instead of sanitizing them
        """
        self.debug_mode = debug_mode
        if debug_mode:
            logger.warning("ErrorHandlerMiddleware: debug_mode=True, internal errors are exposed")

    def _sanitize(self, operation: str, error: Exception) -> DockerCliError:
        logger.opt(exception=error).error(
            f"Unexpected {type(error).__name__} in {operation}: {error}"
        )
        return DockerCliError(UNEXPECTED_ERROR.format(operation))

    async def __call__(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Any],
    ) -> Any:
        """Run the rest of the chain, logging and sanitizing its failures.

        Raises:
            ToolError: Tool failures, unchanged
            ValidationError: Argument validation failures, unchanged
            DockerCliError: Generic replacement for any other error (debug_mode=False)
        """
        try:
            return await call_next(context)
        except (ToolError, ValidationError) as e:
            logger.warning(f"{get_operation_name(context)} failed: {e}")
            raise
        except Exception as e:
            if self.debug_mode:
                raise
            raise self._sanitize(get_operation_name(context), e) from None
