"""Unit tests for DebugLoggingMiddleware and middleware utilities."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from docker_cli_mcp.middleware.debug_logging import DebugLoggingMiddleware
from docker_cli_mcp.middleware.utils import get_operation_name, get_operation_type


def _tool_context(name: str, arguments: dict) -> Mock:
    message = Mock()
    message.name = name
    message.arguments = arguments
    context = Mock()
    context.message = message
    return context


class TestDebugLoggingMiddleware:
    """Test DebugLoggingMiddleware functionality."""

    @pytest.mark.asyncio
    async def test_disabled_passthrough_without_logging(self) -> None:
        """Test the disabled middleware does not log requests."""
        middleware = DebugLoggingMiddleware(debug_enabled=False)
        call_next = AsyncMock(return_value="ok")
        context = _tool_context("list_containers", {"all": True})

        with patch("docker_cli_mcp.middleware.debug_logging.logger") as mock_logger:
            result = await middleware(context, call_next)

        assert result == "ok"
        call_next.assert_called_once_with(context)
        mock_logger.debug.assert_not_called()

    @pytest.mark.asyncio
    async def test_enabled_logs_request_and_response(self) -> None:
        """Test request arguments and results are logged."""
        middleware = DebugLoggingMiddleware(debug_enabled=True)
        call_next = AsyncMock(return_value="Container 'web1' started successfully")
        context = _tool_context("start_container", {"container": "web1"})

        with patch("docker_cli_mcp.middleware.debug_logging.logger") as mock_logger:
            result = await middleware(context, call_next)

        assert result == "Container 'web1' started successfully"
        logged = " ".join(str(call.args[0]) for call in mock_logger.debug.call_args_list)
        assert "MCP Request: tool_call:start_container" in logged
        assert '"container": "web1"' in logged
        assert "SUCCESS" in logged

    @pytest.mark.asyncio
    async def test_enabled_logs_and_reraises_errors(self) -> None:
        """Test errors are logged and re-raised."""
        middleware = DebugLoggingMiddleware(debug_enabled=True)
        call_next = AsyncMock(side_effect=ValueError("bad"))
        context = _tool_context("remove_container", {"container": "x"})

        with patch("docker_cli_mcp.middleware.debug_logging.logger") as mock_logger:
            with pytest.raises(ValueError, match="bad"):
                await middleware(context, call_next)

        logged = " ".join(str(call.args[0]) for call in mock_logger.debug.call_args_list)
        assert "ERROR" in logged
        assert "ValueError: bad" in logged

    def test_truncate_if_needed(self) -> None:
        """Test long payloads are truncated with a total length note."""
        middleware = DebugLoggingMiddleware()
        text = middleware._truncate_if_needed("x" * 50, max_length=10)
        assert text.startswith("x" * 10)
        assert "truncated, 50 total chars" in text

    def test_truncate_serializes_dicts(self) -> None:
        """Test dicts are rendered as JSON."""
        middleware = DebugLoggingMiddleware()
        assert middleware._truncate_if_needed({"a": 1}) == '{\n  "a": 1\n}'


class TestMiddlewareUtils:
    """Test operation naming helpers."""

    def test_tool_call(self) -> None:
        """Test tool calls are named after the tool."""
        context = _tool_context("compose_ps", {})
        assert get_operation_type(context) == "tool_call:compose_ps"
        assert get_operation_name(context) == "compose_ps"

    def test_protocol_method(self) -> None:
        """Test protocol operations use the context method."""
        context = Mock()
        context.message = Mock(spec=[])
        context.method = "tools/list"
        assert get_operation_type(context) == "tools/list"
        assert get_operation_name(context) == "tools/list"
