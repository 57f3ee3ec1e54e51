"""Container engine command execution.

Every tool funnels through ``DockerCliExecutor``: it spawns the engine binary
with a ``CommandSpec``, buffers both output streams completely and classifies
the exit status. It knows nothing about individual tools.
"""

import asyncio
import subprocess
from dataclasses import dataclass

from docker_cli_mcp.cli.command import CommandBuilder, CommandSpec
from docker_cli_mcp.config import DockerCliConfig
from docker_cli_mcp.utils.errors import (
    CommandFailedError,
    CommandSpawnError,
    CommandValidationError,
)
from docker_cli_mcp.utils.logger import get_logger
from docker_cli_mcp.utils.messages import COMMAND_FAILED

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one engine invocation."""

    spec: CommandSpec
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Whether the engine exited with status zero."""
        return self.exit_code == 0

    def failure_message(self) -> str:
        """Return stderr verbatim, or a synthesized message when stderr is empty."""
        if self.stderr:
            return self.stderr
        return COMMAND_FAILED.format(self.spec.subcommand, self.exit_code)


class DockerCliExecutor:
    """Runs container engine commands as child processes."""

    def __init__(self, config: DockerCliConfig) -> None:
        """Initialize the executor.

        Args:
            config: Container engine CLI configuration

        """
        self.config = config
        self.binary = config.binary
        logger.debug(f"Initialized DockerCliExecutor with binary={self.binary}")

    def _validate_tokens(self, spec: CommandSpec) -> None:
        """Reject tokens the operating system cannot pass to a child process.

        Without a shell, every other character reaches the engine literally.

        Raises:
            CommandValidationError: If a token contains a null byte

        """
        for token in spec.tokens:
            if "\x00" in token:
                raise CommandValidationError(f"Argument contains null byte: {token!r}")

    def run(self, spec: CommandSpec) -> CommandResult:
        """Run a command and capture its outcome without classifying it.

        Blocks until the child process exits. There is no timeout. The child reads
        stdin from the null device; the server's own stdin carries the stdio transport.

        Args:
            spec: Command to run

        Returns:
            Captured exit status, stdout and stderr

        Raises:
            CommandValidationError: If a token cannot be passed to the process
            CommandSpawnError: If the binary cannot be started

        """
        self._validate_tokens(spec)
        argv = spec.argv(self.binary)

        logger.debug(f"Executing command: {' '.join(argv)}")

        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            logger.error(f"Failed to start '{self.binary}' for '{spec.subcommand}': {e}")
            raise CommandSpawnError(str(e)) from e

        logger.debug(f"Command '{spec.subcommand}' completed with exit code: {completed.returncode}")
        return CommandResult(
            spec=spec,
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def execute(self, spec: CommandSpec) -> str:
        """Run a command and return its stdout, raising on a non-zero exit.

        Args:
            spec: Command to run

        Returns:
            Complete standard output (possibly empty)

        Raises:
            CommandFailedError: If the engine exits with a non-zero status
            CommandSpawnError: If the binary cannot be started
            CommandValidationError: If a token cannot be passed to the process

        """
        result = self.run(spec)
        if not result.ok:
            message = result.failure_message()
            logger.error(
                f"Command '{spec.subcommand}' failed with exit code {result.exit_code}: {message}"
            )
            raise CommandFailedError(
                message,
                exit_code=result.exit_code,
                stderr=result.stderr,
                spec=spec,
            )
        return result.stdout

    async def execute_async(self, spec: CommandSpec) -> str:
        """Run ``execute`` in a worker thread so only the calling tool waits."""
        return await asyncio.to_thread(self.execute, spec)

    def version(self) -> str:
        """Return the engine's version report as JSON text.

        Raises:
            CommandExecutionError: If the engine is missing or unreachable

        """
        return self.execute(CommandBuilder("version").option("--format", "json").build())

    def __repr__(self) -> str:
        """Return string representation."""
        return f"DockerCliExecutor(binary={self.binary})"
