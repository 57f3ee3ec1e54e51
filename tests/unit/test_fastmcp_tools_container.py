"""Unit tests for fastmcp_tools/container.py."""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from docker_cli_mcp.cli.command import CommandSpec
from docker_cli_mcp.fastmcp_tools.container import (
    TABLE_FORMAT,
    ContainerLogsInput,
    ContainerTargetInput,
    ExecInContainerInput,
    ListContainersInput,
    RemoveContainerInput,
    RunContainerInput,
    StopContainerInput,
    build_container_logs_command,
    build_exec_in_container_command,
    build_inspect_container_command,
    build_list_containers_command,
    build_remove_container_command,
    build_restart_container_command,
    build_run_container_command,
    build_start_container_command,
    build_stop_container_command,
    create_container_logs_tool,
    create_exec_in_container_tool,
    create_inspect_container_tool,
    create_list_containers_tool,
    create_remove_container_tool,
    create_restart_container_tool,
    create_run_container_tool,
    create_start_container_tool,
    create_stop_container_tool,
)
from docker_cli_mcp.utils.errors import CommandFailedError
from docker_cli_mcp.utils.safety import OperationSafety


def _awaited_spec(mock_executor: Mock) -> CommandSpec:
    """Return the single CommandSpec the tool handed to the executor."""
    mock_executor.execute_async.assert_awaited_once()
    spec: CommandSpec = mock_executor.execute_async.await_args.args[0]
    return spec


class TestContainerLowering:
    """Test argument lowering for container tools."""

    def test_list_containers_defaults_to_json(self) -> None:
        """Test default listing format."""
        spec = build_list_containers_command(ListContainersInput())
        assert spec.tokens == ("ps", "--format", "json")

    def test_list_containers_all_table(self) -> None:
        """Test -a precedes the table template."""
        spec = build_list_containers_command(ListContainersInput(all=True, format="table"))
        assert spec.tokens == ("ps", "-a", "--format", TABLE_FORMAT)

    def test_list_containers_rejects_unknown_format(self) -> None:
        """Test the format enum is enforced by the schema."""
        with pytest.raises(ValidationError):
            ListContainersInput(format="yaml")  # type: ignore[arg-type]

    def test_logs_full(self) -> None:
        """Test every logs option in grammar order, container last."""
        params = ContainerLogsInput(container="web1", tail=100, since="10m", timestamps=True)
        assert build_container_logs_command(params).tokens == (
            "logs",
            "--tail",
            "100",
            "--since",
            "10m",
            "--timestamps",
            "web1",
        )

    def test_logs_minimal(self) -> None:
        """Test only the target when no options are set."""
        assert build_container_logs_command(ContainerLogsInput(container="web1")).tokens == (
            "logs",
            "web1",
        )

    def test_logs_tail_zero_is_lowered(self) -> None:
        """Test an explicit zero tail is passed to the engine."""
        params = ContainerLogsInput(container="web1", tail=0)
        assert build_container_logs_command(params).tokens == ("logs", "--tail", "0", "web1")

    def test_logs_negative_tail_rejected(self) -> None:
        """Test negative tails fail validation upstream of lowering."""
        with pytest.raises(ValidationError):
            ContainerLogsInput(container="web1", tail=-1)

    def test_start(self) -> None:
        """Test start lowering."""
        spec = build_start_container_command(ContainerTargetInput(container="web1"))
        assert spec.tokens == ("start", "web1")
        assert spec.subcommand == "start"

    def test_stop_with_time(self) -> None:
        """Test -t precedes the container."""
        spec = build_stop_container_command(StopContainerInput(container="web1", time=5))
        assert spec.tokens == ("stop", "-t", "5", "web1")

    def test_stop_time_zero(self) -> None:
        """Test an immediate stop keeps the -t 0 pair."""
        spec = build_stop_container_command(StopContainerInput(container="web1", time=0))
        assert spec.tokens == ("stop", "-t", "0", "web1")

    def test_restart(self) -> None:
        """Test restart lowering with and without time."""
        assert build_restart_container_command(
            StopContainerInput(container="web1")
        ).tokens == ("restart", "web1")
        assert build_restart_container_command(
            StopContainerInput(container="web1", time=3)
        ).tokens == ("restart", "-t", "3", "web1")

    @pytest.mark.parametrize(
        "force,volumes,expected",
        [
            (False, False, ("rm", "web1")),
            (True, False, ("rm", "-f", "web1")),
            (False, True, ("rm", "-v", "web1")),
            (True, True, ("rm", "-f", "-v", "web1")),
        ],
    )
    def test_remove(self, force: bool, volumes: bool, expected: tuple[str, ...]) -> None:
        """Test remove flag combinations."""
        params = RemoveContainerInput(container="web1", force=force, volumes=volumes)
        assert build_remove_container_command(params).tokens == expected

    def test_inspect(self) -> None:
        """Test inspect lowering."""
        spec = build_inspect_container_command(ContainerTargetInput(container="abc"))
        assert spec.tokens == ("inspect", "abc")

    def test_exec_string_command_uses_container_shell(self) -> None:
        """Test a command string is passed whole to sh -c."""
        params = ExecInContainerInput(
            container="web1", command="echo 'a b' && ls", workdir="/app", user="1000"
        )
        assert build_exec_in_container_command(params).tokens == (
            "exec",
            "-w",
            "/app",
            "-u",
            "1000",
            "web1",
            "sh",
            "-c",
            "echo 'a b' && ls",
        )

    def test_exec_argument_list(self) -> None:
        """Test a pre-tokenized command is appended without a shell."""
        params = ExecInContainerInput(container="web1", command=["python", "-c", "print(1 + 1)"])
        assert build_exec_in_container_command(params).tokens == (
            "exec",
            "web1",
            "python",
            "-c",
            "print(1 + 1)",
        )

    @pytest.mark.parametrize("command", ["", "   ", []])
    def test_exec_empty_command_rejected(self, command: str | list[str]) -> None:
        """Test empty commands fail validation."""
        with pytest.raises(ValidationError):
            ExecInContainerInput(container="web1", command=command)

    def test_run_scenario(self) -> None:
        """Test detach default, port mapping and the image after all flags."""
        params = RunContainerInput(image="nginx", ports=["8080:80"])
        spec = build_run_container_command(params)
        assert spec.tokens == ("run", "-d", "-p", "8080:80", "nginx")
        assert spec.tokens[-1] == "nginx"

    def test_run_full(self) -> None:
        """Test full run grammar order."""
        params = RunContainerInput(
            image="alpine:3",
            name="job",
            detach=False,
            ports=["80:80", "443:443"],
            env=["A=1", "B=2"],
            volumes=["/data:/data"],
            network="backend",
            command="sh -c 'echo hello world'",
            rm=True,
        )
        assert build_run_container_command(params).tokens == (
            "run",
            "--name",
            "job",
            "--rm",
            "--network",
            "backend",
            "-p",
            "80:80",
            "-p",
            "443:443",
            "-e",
            "A=1",
            "-e",
            "B=2",
            "-v",
            "/data:/data",
            "alpine:3",
            "sh",
            "-c",
            "echo hello world",
        )

    def test_run_command_list_passthrough(self) -> None:
        """Test a pre-tokenized command is used as-is."""
        params = RunContainerInput(image="alpine", command=["echo", "a  b"])
        assert build_run_container_command(params).tokens[-3:] == ("alpine", "echo", "a  b")

    def test_run_blank_command_is_absent(self) -> None:
        """Test a blank command string lowers to nothing."""
        params = RunContainerInput(image="alpine", command="  ")
        assert params.command is None
        assert build_run_container_command(params).tokens == ("run", "-d", "alpine")

    def test_run_unbalanced_quotes_rejected(self) -> None:
        """Test tokenizing failures surface as validation errors."""
        with pytest.raises(ValidationError):
            RunContainerInput(image="alpine", command="echo 'oops")


class TestContainerTools:
    """Test container tool handlers with a mocked executor."""

    @pytest.mark.asyncio
    async def test_list_containers_output(self, mock_executor: Mock) -> None:
        """Test engine output is returned unchanged."""
        mock_executor.execute_async.return_value = '{"ID":"abc"}\n'
        *_, list_containers = create_list_containers_tool(mock_executor)

        result = await list_containers(all=True)

        assert result == '{"ID":"abc"}\n'
        assert _awaited_spec(mock_executor).tokens == ("ps", "-a", "--format", "json")

    @pytest.mark.asyncio
    async def test_list_containers_empty(self, mock_executor: Mock) -> None:
        """Test the placeholder for empty successful output."""
        *_, list_containers = create_list_containers_tool(mock_executor)
        assert await list_containers() == "No containers found"

    @pytest.mark.asyncio
    async def test_logs_empty(self, mock_executor: Mock) -> None:
        """Test the logs placeholder."""
        *_, get_logs = create_container_logs_tool(mock_executor)
        assert await get_logs(container="web1", tail=10) == "No logs available"
        assert _awaited_spec(mock_executor).tokens == ("logs", "--tail", "10", "web1")

    @pytest.mark.asyncio
    async def test_start_container(self, mock_executor: Mock) -> None:
        """Test start confirmation names the container."""
        mock_executor.execute_async.return_value = "web1\n"
        *_, start_container = create_start_container_tool(mock_executor)

        result = await start_container(container="web1")

        assert result == "Container 'web1' started successfully"
        assert _awaited_spec(mock_executor).tokens == ("start", "web1")

    @pytest.mark.asyncio
    async def test_stop_container(self, mock_executor: Mock) -> None:
        """Test stop lowering and confirmation."""
        *_, stop_container = create_stop_container_tool(mock_executor)

        result = await stop_container(container="web1", time=5)

        assert result == "Container 'web1' stopped successfully"
        assert _awaited_spec(mock_executor).tokens == ("stop", "-t", "5", "web1")

    @pytest.mark.asyncio
    async def test_restart_container(self, mock_executor: Mock) -> None:
        """Test restart confirmation."""
        *_, restart_container = create_restart_container_tool(mock_executor)
        assert await restart_container(container="db") == "Container 'db' restarted successfully"

    @pytest.mark.asyncio
    async def test_remove_container_failure_propagates(self, mock_executor: Mock) -> None:
        """Test engine failures are raised, not turned into text."""
        mock_executor.execute_async.side_effect = CommandFailedError(
            "Error: No such container: x", exit_code=1, stderr="Error: No such container: x"
        )
        *_, remove_container = create_remove_container_tool(mock_executor)

        with pytest.raises(CommandFailedError) as exc_info:
            await remove_container(container="x")

        assert str(exc_info.value) == "Error: No such container: x"

    @pytest.mark.asyncio
    async def test_remove_container(self, mock_executor: Mock) -> None:
        """Test remove confirmation and flags."""
        *_, remove_container = create_remove_container_tool(mock_executor)
        result = await remove_container(container="web1", force=True)
        assert result == "Container 'web1' removed successfully"
        assert _awaited_spec(mock_executor).tokens == ("rm", "-f", "web1")

    @pytest.mark.asyncio
    async def test_inspect_container(self, mock_executor: Mock) -> None:
        """Test inspect output passthrough."""
        mock_executor.execute_async.return_value = '[{"Id": "abc"}]\n'
        *_, inspect_container = create_inspect_container_tool(mock_executor)
        assert await inspect_container(container="abc") == '[{"Id": "abc"}]\n'

    @pytest.mark.asyncio
    async def test_exec_no_output(self, mock_executor: Mock) -> None:
        """Test the exec placeholder."""
        *_, exec_in_container = create_exec_in_container_tool(mock_executor)
        result = await exec_in_container(container="web1", command="touch /tmp/x")
        assert result == "Command executed successfully (no output)"
        assert _awaited_spec(mock_executor).tokens[-3:] == ("sh", "-c", "touch /tmp/x")

    @pytest.mark.asyncio
    async def test_run_container_reports_id(self, mock_executor: Mock) -> None:
        """Test run reports the trimmed container ID."""
        mock_executor.execute_async.return_value = "3f2a9c\n"
        *_, run_container = create_run_container_tool(mock_executor)

        result = await run_container(image="nginx", ports=["8080:80"])

        assert result == "Container started: 3f2a9c"
        tokens = _awaited_spec(mock_executor).tokens
        assert "-d" in tokens
        assert tokens[tokens.index("-p") + 1] == "8080:80"
        assert tokens[-1] == "nginx"

    @pytest.mark.parametrize(
        "factory,name,safety,idempotent,open_world",
        [
            (create_list_containers_tool, "list_containers", OperationSafety.SAFE, True, False),
            (create_container_logs_tool, "get_container_logs", OperationSafety.SAFE, True, False),
            (create_start_container_tool, "start_container", OperationSafety.MODERATE, True, False),
            (create_stop_container_tool, "stop_container", OperationSafety.MODERATE, True, False),
            (
                create_restart_container_tool,
                "restart_container",
                OperationSafety.MODERATE,
                False,
                False,
            ),
            (
                create_remove_container_tool,
                "remove_container",
                OperationSafety.DESTRUCTIVE,
                False,
                False,
            ),
            (create_inspect_container_tool, "inspect_container", OperationSafety.SAFE, True, False),
            (
                create_exec_in_container_tool,
                "exec_in_container",
                OperationSafety.MODERATE,
                False,
                False,
            ),
            (create_run_container_tool, "run_container", OperationSafety.MODERATE, False, True),
        ],
    )
    def test_tool_metadata(  # noqa: PLR0913
        self,
        mock_executor: Mock,
        factory: object,
        name: str,
        safety: OperationSafety,
        idempotent: bool,
        open_world: bool,
    ) -> None:
        """Test each factory's registration tuple."""
        tool_name, description, level, is_idempotent, is_open_world, func = factory(  # type: ignore[operator]
            mock_executor
        )
        assert tool_name == name
        assert description
        assert level == safety
        assert is_idempotent is idempotent
        assert is_open_world is open_world
        assert callable(func)
