"""Remote command execution over SSH."""

import logging
from typing import TYPE_CHECKING

import asyncssh

from install_mcp.exceptions import RemoteExecutionError
from install_mcp.models import CommandResult
from install_mcp.services.connection import get_connection_with_retry

if TYPE_CHECKING:
    from install_mcp.models import ServerProfile
    from install_mcp.services.pool import ConnectionPool

logger = logging.getLogger(__name__)


def _decode(stream: str | bytes | None) -> str:
    """Decode an SSH output stream to text."""
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


async def run_command(
    conn: "asyncssh.SSHClientConnection",
    command: str,
    timeout: int,
) -> CommandResult:
    """Execute a command line on an open connection.

    Args:
        conn: SSH connection to execute on
        command: Full command line, run by the remote shell
        timeout: Seconds before the command is abandoned

    Returns:
        CommandResult with stdout, stderr, and return code.

    Raises:
        asyncssh.TimeoutError: If the command exceeds the timeout
    """
    result = await conn.run(command, check=False, timeout=timeout)
    returncode = result.returncode if result.returncode is not None else 0

    return CommandResult(
        output=_decode(result.stdout),
        error=_decode(result.stderr),
        returncode=returncode,
    )


class SSHCommandRunner:
    """Runs command lines on registered servers through the connection pool."""

    def __init__(self, pool: "ConnectionPool | None" = None, timeout: int = 600) -> None:
        """Initialize runner.

        Args:
            pool: Pool to draw connections from (default: the global pool)
            timeout: Seconds before a command is abandoned
        """
        self.pool = pool
        self.timeout = timeout

    async def run(self, server: "ServerProfile", command: str) -> CommandResult:
        """Run a command line on a server.

        Raises:
            RemoteExecutionError: If the connection fails or the command times out
        """
        try:
            conn = await get_connection_with_retry(server, self.pool)
            return await run_command(conn, command, self.timeout)
        except asyncssh.TimeoutError as e:
            logger.warning("Command on %s timed out after %ds", server.address, self.timeout)
            raise RemoteExecutionError(
                server.address,
                f"timed out after {self.timeout}s",
                output=_decode(e.stdout) + _decode(e.stderr),
            ) from e
        except Exception as e:
            raise RemoteExecutionError(server.address, str(e)) from e
