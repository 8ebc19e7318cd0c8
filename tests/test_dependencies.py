"""Tests for dependency container and server lifespan."""

from pathlib import Path
from unittest.mock import patch

import pytest

from install_mcp.config import Config, Settings
from install_mcp.dependencies import Dependencies
from install_mcp.services import get_pool, get_runner, reset_state
from install_mcp.services.pool import ConnectionPool


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config with one registered server."""
    registry = tmp_path / "servers"
    registry.write_text("Server 10.0.0.5\n    User root\n")
    return Config.from_registry_file(
        registry, settings=Settings(max_pool_size=5, command_timeout=120)
    )


class TestDependencies:
    """Test Dependencies container."""

    def test_from_config_builds_pool_and_runner(self, config: Config) -> None:
        """Pool and runner are built from config values."""
        deps = Dependencies.from_config(config)

        assert deps.config is config
        assert isinstance(deps.pool, ConnectionPool)
        assert deps.pool.max_size == 5
        assert deps.runner.timeout == 120
        assert deps.runner.pool is deps.pool


@pytest.mark.asyncio
async def test_lifespan_installs_pool(config: Config) -> None:
    """Lifespan publishes its pool and reports registered servers."""
    from install_mcp.server import app_lifespan, create_server

    try:
        with patch("install_mcp.server.get_config", return_value=config):
            server = create_server()
            async with app_lifespan(server) as result:
                assert result == {"servers": ["10.0.0.5"]}
                assert get_pool().max_size == 5
                assert get_runner().pool is get_pool()
                assert get_runner().timeout == 120
    finally:
        reset_state()


def test_runner_defaults_to_config_timeout(config: Config) -> None:
    """Outside the lifespan the shared runner is built from config."""
    from install_mcp.services import set_config

    try:
        set_config(config)
        runner = get_runner()

        assert runner.timeout == 120
        assert runner.pool is None
        assert get_runner() is runner
    finally:
        reset_state()
