"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from docker_cli_mcp.cli.executor import DockerCliExecutor
from docker_cli_mcp.config import Config, DockerCliConfig, SafetyConfig, ServerConfig
from docker_cli_mcp.version import __version__


@pytest.fixture
def docker_cli_config() -> DockerCliConfig:
    """Create test container engine CLI configuration."""
    return DockerCliConfig(binary="docker", health_check=False)


@pytest.fixture
def safety_config() -> SafetyConfig:
    """Create tool filtering configuration that exposes every tool."""
    return SafetyConfig(allowed_tools=[], denied_tools=[])


@pytest.fixture
def server_config() -> ServerConfig:
    """Create test server configuration."""
    return ServerConfig(
        server_name="docker-cli-mcp-test",
        server_version=__version__,
        log_level="DEBUG",
    )


@pytest.fixture
def config(
    docker_cli_config: DockerCliConfig,
    safety_config: SafetyConfig,
    server_config: ServerConfig,
) -> Config:
    """Create complete test configuration."""
    test_config = Config.__new__(Config)
    test_config.docker = docker_cli_config
    test_config.safety = safety_config
    test_config.server = server_config
    return test_config


@pytest.fixture
def executor(docker_cli_config: DockerCliConfig) -> DockerCliExecutor:
    """Create a real executor (tests patch subprocess.run where needed)."""
    return DockerCliExecutor(docker_cli_config)


@pytest.fixture
def mock_executor() -> Mock:
    """Create a mock executor whose async execution returns empty output."""
    mock = Mock(spec=DockerCliExecutor)
    mock.binary = "docker"
    mock.execute_async = AsyncMock(return_value="")
    return mock
