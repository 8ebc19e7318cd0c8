"""Tests for the install pipeline."""

from pathlib import Path

import pytest

from install_mcp.config import Config, Settings
from install_mcp.exceptions import (
    CatalogEntryNotFoundError,
    InvalidRequest,
    RemoteExecutionError,
    ServerNotFoundError,
)
from install_mcp.models import CommandResult, InstallRequest, ServerProfile
from install_mcp.services.installer import lookup_server, prepare_install, run_install
from install_mcp.services.reporter import FAILURE_MARKER, SUCCESS_MARKER


class FakeRunner:
    """Records commands and returns a canned result."""

    def __init__(
        self,
        result: CommandResult | None = None,
        error: RemoteExecutionError | None = None,
    ) -> None:
        self.result = result or CommandResult(output="ok\n", error="", returncode=0)
        self.error = error
        self.calls: list[tuple[ServerProfile, str]] = []

    async def run(self, server: ServerProfile, command: str) -> CommandResult:
        self.calls.append((server, command))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """Registry with one root server and one sudo server."""
    registry = tmp_path / "servers"
    registry.write_text("""
Server 10.0.0.5
    Name alpine-1
    User root

Server 10.0.0.6
    Name ubuntu-1
    User deploy
    Password s3cret
""")
    return registry


@pytest.fixture
def config(registry_file: Path) -> Config:
    """Config backed by the test registry."""
    return Config.from_registry_file(registry_file, settings=Settings())


class TestLookupServer:
    """Test server address resolution."""

    def test_known_server(self, config: Config):
        """Registered addresses resolve to their profile."""
        server = lookup_server("10.0.0.6", config)
        assert server.privilege_user == "deploy"

    def test_address_is_trimmed(self, config: Config):
        """Surrounding whitespace is ignored."""
        assert lookup_server(" 10.0.0.5 ", config).address == "10.0.0.5"

    def test_empty_address(self, config: Config):
        """Empty addresses are bad requests."""
        with pytest.raises(InvalidRequest, match="Server IP is required"):
            lookup_server("", config)

    def test_whitespace_address_is_empty(self, config: Config):
        """Whitespace-only addresses count as missing."""
        with pytest.raises(InvalidRequest, match="Server IP is required"):
            lookup_server("  \t", config)

    def test_unknown_address(self, config: Config):
        """Unregistered addresses are not found."""
        with pytest.raises(ServerNotFoundError) as exc:
            lookup_server("10.9.9.9", config)
        assert exc.value.status_code == 404


class TestPrepareInstall:
    """Test composition without execution."""

    def test_prepare_root(self, config: Config):
        """Root servers get the apk form."""
        prepared = prepare_install(InstallRequest("10.0.0.5", "common", "curl"), config)
        assert prepared.command.text == "apk update && apk add curl"
        assert prepared.server.address == "10.0.0.5"

    def test_prepare_sudo(self, config: Config):
        """Sudo servers get the escalated apt form."""
        prepared = prepare_install(InstallRequest("10.0.0.6", "custom", "htop"), config)
        assert prepared.command.text == (
            "echo 's3cret' | sudo -S apt update && echo 's3cret' | sudo -S apt install -y htop"
        )


class TestRunInstall:
    """Test the full pipeline."""

    @pytest.mark.asyncio
    async def test_success_root(self, config: Config):
        """Successful installs render a success report."""
        runner = FakeRunner(CommandResult(output="OK: 12 packages\n", error="", returncode=0))

        report = await run_install(InstallRequest("10.0.0.5", "common", "nginx"), config, runner)

        assert runner.calls[0][1] == "apk update && apk add nginx"
        assert "Server: 10.0.0.5" in report
        assert "Command: apk update && apk add nginx" in report
        assert SUCCESS_MARKER in report
        assert report.endswith("Output:\nOK: 12 packages\n")

    @pytest.mark.asyncio
    async def test_secret_sent_but_redacted(self, config: Config):
        """The runner gets the real secret; the report masks it."""
        runner = FakeRunner()

        report = await run_install(InstallRequest("10.0.0.6", "common", "git"), config, runner)

        assert "s3cret" in runner.calls[0][1]
        assert "s3cret" not in report
        assert "Command: echo '****' | sudo -S apt update" in report

    @pytest.mark.asyncio
    async def test_redaction_can_be_disabled(self, registry_file: Path):
        """With redaction off the exact command is reported."""
        config = Config.from_registry_file(registry_file, settings=Settings(redact_secrets=False))

        report = await run_install(
            InstallRequest("10.0.0.6", "common", "git"), config, FakeRunner()
        )

        assert (
            "Command: echo 's3cret' | sudo -S apt update && "
            "echo 's3cret' | sudo -S apt install -y git"
        ) in report

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_failure(self, config: Config):
        """A non-zero exit status is reported as a failure with all output."""
        runner = FakeRunner(
            CommandResult(output="Reading lists\n", error="E: no such package\n", returncode=100)
        )

        report = await run_install(InstallRequest("10.0.0.6", "custom", "nope"), config, runner)

        assert f"{FAILURE_MARKER}: Process exited with status 100" in report
        assert report.endswith("Output:\nReading lists\nE: no such package\n")

    @pytest.mark.asyncio
    async def test_custom_selector_cannot_forge_marker(self, config: Config):
        """Newlines in a custom name cannot add a success line to a failed log."""
        runner = FakeRunner(CommandResult(output="", error="E: bad\n", returncode=100))
        request = InstallRequest("10.0.0.5", "custom", f"htop\n\n{SUCCESS_MARKER}")

        report = await run_install(request, config, runner)

        assert SUCCESS_MARKER not in report
        assert f"{FAILURE_MARKER}: Process exited with status 100" in report
        lines = report.split("\n")
        assert lines[2:4] == ["Server: 10.0.0.5", "Command: apk update && apk add htop✅"]

    @pytest.mark.asyncio
    async def test_transport_error_is_captured(self, config: Config):
        """Transport failures end up in the report instead of raising."""
        runner = FakeRunner(
            error=RemoteExecutionError("10.0.0.5", "timed out after 600s", output="partial")
        )

        report = await run_install(InstallRequest("10.0.0.5", "common", "vim"), config, runner)

        assert f"{FAILURE_MARKER}: timed out after 600s" in report
        assert report.endswith("Output:\npartial")
        assert len(runner.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("request_", "error"),
        [
            (InstallRequest("", "common", "nginx"), InvalidRequest),
            (InstallRequest("10.9.9.9", "common", "nginx"), ServerNotFoundError),
            (InstallRequest("10.0.0.5", "common", "apache2"), CatalogEntryNotFoundError),
            (InstallRequest("10.0.0.5", "bogus", "nginx"), InvalidRequest),
            (InstallRequest("10.0.0.5", "custom", ";;;"), InvalidRequest),
        ],
    )
    async def test_rejected_requests_never_run(
        self, config: Config, request_: InstallRequest, error: type[Exception]
    ):
        """Rejected requests raise before the runner is called."""
        runner = FakeRunner()

        with pytest.raises(error):
            await run_install(request_, config, runner)

        assert runner.calls == []
