"""Dependency injection container for install_mcp."""

from dataclasses import dataclass

from install_mcp.config import Config
from install_mcp.services.executors import SSHCommandRunner
from install_mcp.services.pool import ConnectionPool


@dataclass
class Dependencies:
    """Container for install_mcp dependencies.

    Holds the configuration, the connection pool, and the command runner
    built on top of that pool.
    """

    config: Config
    pool: ConnectionPool
    runner: SSHCommandRunner

    @classmethod
    def from_config(cls, config: Config) -> "Dependencies":
        """Create dependencies from a configuration.

        Args:
            config: Config instance

        Returns:
            Dependencies with pool and runner initialized from config
        """
        pool = ConnectionPool(
            idle_timeout=config.idle_timeout,
            max_size=config.max_pool_size,
            known_hosts=config.known_hosts_path,
            strict_host_key_checking=config.strict_host_key_checking,
        )
        runner = SSHCommandRunner(pool=pool, timeout=config.command_timeout)
        return cls(config=config, pool=pool, runner=runner)

    async def cleanup(self) -> None:
        """Close all pooled connections."""
        await self.pool.close_all()
