"""Tests for Settings environment parsing."""

import pytest

from install_mcp.config.settings import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings use defaults when nothing is set."""
    for key in ("INSTALL_COMMAND_TIMEOUT", "INSTALL_TRANSPORT", "INSTALL_REDACT_SECRETS"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings.from_env()

    assert settings.command_timeout == 600
    assert settings.transport == "http"
    assert settings.redact_secrets is True


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings read INSTALL_* variables."""
    monkeypatch.setenv("INSTALL_COMMAND_TIMEOUT", "120")
    monkeypatch.setenv("INSTALL_HTTP_PORT", "9000")
    monkeypatch.setenv("INSTALL_TRANSPORT", "STDIO")
    monkeypatch.setenv("INSTALL_REDACT_SECRETS", "false")
    monkeypatch.setenv("INSTALL_LOG_PAYLOADS", "yes")

    settings = Settings.from_env()

    assert settings.command_timeout == 120
    assert settings.http_port == 9000
    assert settings.transport == "stdio"
    assert settings.redact_secrets is False
    assert settings.log_payloads is True


def test_invalid_int_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid integers fall back to the default."""
    monkeypatch.setenv("INSTALL_COMMAND_TIMEOUT", "soon")

    assert Settings.from_env().command_timeout == 600


def test_invalid_transport_uses_http(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unknown transports fall back to http."""
    monkeypatch.setenv("INSTALL_TRANSPORT", "carrier-pigeon")

    assert Settings.from_env().transport == "http"


def test_servers_file_expanded(monkeypatch: pytest.MonkeyPatch) -> None:
    """The registry path has ~ expanded."""
    monkeypatch.setenv("INSTALL_SERVERS_FILE", "~/servers")

    assert not Settings.from_env().servers_file.startswith("~")
