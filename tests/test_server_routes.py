"""Tests for the HTTP routes."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from starlette.testclient import TestClient

from install_mcp.config import Config, Settings
from install_mcp.exceptions import RemoteExecutionError
from install_mcp.models import CommandResult
from install_mcp.services import reset_state, set_config


@pytest.fixture
def mock_run() -> Generator[AsyncMock, None, None]:
    """Replace the SSH runner's run method."""
    with patch(
        "install_mcp.services.executors.SSHCommandRunner.run",
        new_callable=AsyncMock,
    ) as mock:
        mock.return_value = CommandResult(output="done\n", error="", returncode=0)
        yield mock


@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Create test client for the HTTP app."""
    from install_mcp.server import create_server

    registry = tmp_path / "servers"
    registry.write_text("Server 10.0.0.5\n    User root\n")
    set_config(Config.from_registry_file(registry, settings=Settings()))

    server = create_server()
    yield TestClient(server.http_app())
    reset_state()


class TestHealthCheck:
    """Tests for the health check endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        """Health endpoint returns OK as plain text."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.text == "OK"
        assert "text/plain" in response.headers["content-type"]


class TestInstallRoute:
    """Tests for the install form endpoint."""

    def test_get_not_allowed(self, client: TestClient, mock_run: AsyncMock) -> None:
        """Only POST is accepted."""
        response = client.get("/install")

        assert response.status_code == 405
        mock_run.assert_not_called()

    def test_common_install(self, client: TestClient, mock_run: AsyncMock) -> None:
        """Catalog installs return the log."""
        response = client.post(
            "/install",
            data={"server_ip": "10.0.0.5", "software_type": "common", "common_software": "git"},
        )

        assert response.status_code == 200
        assert "Command: apk update && apk add git" in response.text
        assert response.text.endswith("Output:\ndone\n")

    def test_custom_install(self, client: TestClient, mock_run: AsyncMock) -> None:
        """Custom installs use the custom_software field."""
        response = client.post(
            "/install",
            data={
                "server_ip": "10.0.0.5",
                "software_type": "custom",
                "common_software": "nginx",
                "custom_software": "htop",
            },
        )

        assert response.status_code == 200
        assert mock_run.call_args.args[1] == "apk update && apk add htop"

    def test_execution_failure_still_200(self, client: TestClient, mock_run: AsyncMock) -> None:
        """Execution failures are reported in the log body."""
        mock_run.side_effect = RemoteExecutionError("10.0.0.5", "connection reset")

        response = client.post(
            "/install",
            data={"server_ip": "10.0.0.5", "software_type": "common", "common_software": "vim"},
        )

        assert response.status_code == 200
        assert "❌ Installation failed: connection reset" in response.text

    @pytest.mark.parametrize(
        ("data", "status", "message"),
        [
            ({"software_type": "common", "common_software": "git"}, 400, "Server IP is required"),
            (
                {"server_ip": "10.0.0.9", "software_type": "common", "common_software": "git"},
                404,
                "Server not found",
            ),
            (
                {"server_ip": "10.0.0.5", "software_type": "common", "common_software": "emacs"},
                400,
                "Selected software not found",
            ),
            ({"server_ip": "10.0.0.5", "software_type": "pip"}, 400, "Invalid software type"),
            (
                {"server_ip": "10.0.0.5", "software_type": "custom", "custom_software": " ; "},
                400,
                "Custom software name is required",
            ),
        ],
    )
    def test_rejections(
        self,
        client: TestClient,
        mock_run: AsyncMock,
        data: dict[str, str],
        status: int,
        message: str,
    ) -> None:
        """Malformed requests map to HTTP status codes and never run."""
        response = client.post("/install", data=data)

        assert response.status_code == status
        assert message in response.text
        mock_run.assert_not_called()
