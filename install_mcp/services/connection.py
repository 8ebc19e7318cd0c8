"""SSH connection helper with automatic retry."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncssh

    from install_mcp.models import ServerProfile
    from install_mcp.services.pool import ConnectionPool

logger = logging.getLogger(__name__)


class SSHConnectionError(Exception):
    """Failed to establish SSH connection after retry."""

    def __init__(self, address: str, original_error: Exception):
        """Initialize connection error.

        Args:
            address: Address of the server
            original_error: Original exception that caused the failure
        """
        self.address = address
        self.original_error = original_error
        super().__init__(f"Cannot connect to {address}: {original_error}")


async def get_connection_with_retry(
    server: "ServerProfile",
    pool: "ConnectionPool | None" = None,
) -> "asyncssh.SSHClientConnection":
    """Get SSH connection with one cleanup-and-retry on failure.

    Only the connection is retried; the install command itself never is.

    Args:
        server: Target server profile
        pool: Pool to use (default: the global pool)

    Returns:
        Active SSH connection

    Raises:
        SSHConnectionError: If connection fails after retry
    """
    if pool is None:
        from install_mcp.services.state import get_pool

        pool = get_pool()

    try:
        return await pool.get_connection(server)
    except Exception as first_error:
        logger.warning(
            "Connection to %s failed: %s, retrying after cleanup",
            server.address,
            first_error,
        )
        try:
            await pool.remove_connection(server.address)
            conn = await pool.get_connection(server)
            logger.info("Retry connection to %s succeeded", server.address)
            return conn
        except Exception as retry_error:
            logger.error(
                "Retry connection to %s failed: %s",
                server.address,
                retry_error,
            )
            raise SSHConnectionError(server.address, retry_error) from retry_error
