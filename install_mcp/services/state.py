"""Global state management for install_mcp."""

from install_mcp.config import Config
from install_mcp.services.executors import SSHCommandRunner
from install_mcp.services.pool import ConnectionPool

_config: Config | None = None
_pool: ConnectionPool | None = None
_runner: SSHCommandRunner | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_pool() -> ConnectionPool:
    """Get or create connection pool."""
    global _pool
    if _pool is None:
        config = get_config()
        _pool = ConnectionPool(
            idle_timeout=config.idle_timeout,
            max_size=config.max_pool_size,
            known_hosts=config.known_hosts_path,
            strict_host_key_checking=config.strict_host_key_checking,
        )
    return _pool


def get_runner() -> SSHCommandRunner:
    """Get or create the command runner shared by the tools and routes.

    Outside the server lifespan the runner resolves the pool lazily
    through get_pool().
    """
    global _runner
    if _runner is None:
        _runner = SSHCommandRunner(timeout=get_config().command_timeout)
    return _runner


def reset_state() -> None:
    """Reset global state for testing."""
    global _config, _pool, _runner
    _config = None
    _pool = None
    _runner = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config


def set_pool(pool: ConnectionPool) -> None:
    """Set the global pool instance.

    Args:
        pool: ConnectionPool instance to use globally.
    """
    global _pool
    _pool = pool


def set_runner(runner: SSHCommandRunner) -> None:
    """Set the global command runner.

    Args:
        runner: Runner bound to the lifespan's connection pool.
    """
    global _runner
    _runner = runner
