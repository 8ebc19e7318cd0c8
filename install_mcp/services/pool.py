"""SSH connection pooling with lazy disconnect.

Locking Strategy:
- `_meta_lock`: Protects _connections OrderedDict and _server_locks dict structure
- Per-server locks: Protect connection creation/removal for specific servers
- Lock acquisition order: Always per-server lock first, then meta-lock if needed

LRU Eviction:
- Uses OrderedDict with move_to_end() for O(1) LRU tracking
- Eviction happens when pool reaches max_size before creating new connection
"""

import asyncio
import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

import asyncssh

from install_mcp.models import PooledConnection

if TYPE_CHECKING:
    from install_mcp.models import ServerProfile

logger = logging.getLogger(__name__)


class ConnectionPool:
    """SSH connection pool keyed by server address."""

    def __init__(
        self,
        idle_timeout: int = 60,
        max_size: int = 100,
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
    ) -> None:
        """Initialize pool with idle timeout and size limits.

        Args:
            idle_timeout: Seconds before idle connections are closed
            max_size: Maximum number of concurrent SSH connections (must be > 0)
            known_hosts: Path to known_hosts file, or None to disable verification
            strict_host_key_checking: Whether to reject unknown host keys

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be > 0, got {max_size}")

        self.idle_timeout = idle_timeout
        self.max_size = max_size
        self._connections: OrderedDict[str, PooledConnection] = OrderedDict()
        self._server_locks: dict[str, asyncio.Lock] = {}
        self._meta_lock = asyncio.Lock()
        self._cleanup_task: asyncio.Task[Any] | None = None
        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking

        if self._known_hosts is None:
            logger.warning(
                "SSH host key verification DISABLED - vulnerable to MITM attacks. "
                "Set INSTALL_KNOWN_HOSTS to a valid known_hosts file path."
            )

        logger.info(
            "ConnectionPool initialized (idle_timeout=%ds, max_size=%d)",
            idle_timeout,
            max_size,
        )

    async def _get_server_lock(self, address: str) -> asyncio.Lock:
        """Get or create lock for a specific server."""
        async with self._meta_lock:
            if address not in self._server_locks:
                self._server_locks[address] = asyncio.Lock()
            return self._server_locks[address]

    async def _evict_lru_if_needed(self) -> None:
        """Evict least recently used connections if at capacity."""
        to_close: list[PooledConnection] = []

        async with self._meta_lock:
            while len(self._connections) >= self.max_size:
                oldest = next(iter(self._connections))
                logger.info(
                    "Pool at capacity (%d/%d), evicting LRU: %s",
                    len(self._connections),
                    self.max_size,
                    oldest,
                )
                to_close.append(self._connections.pop(oldest))

        for pooled in to_close:
            pooled.connection.close()

    async def _connect(
        self, server: "ServerProfile", known_hosts: str | None
    ) -> asyncssh.SSHClientConnection:
        """Open a new SSH connection as the server's privilege user."""
        options: dict[str, Any] = {
            "port": server.port,
            "username": server.privilege_user,
            "known_hosts": known_hosts,
            "client_keys": [server.identity_file] if server.identity_file else None,
        }
        if server.privilege_secret:
            options["password"] = server.privilege_secret
        return await asyncssh.connect(server.address, **options)

    async def get_connection(self, server: "ServerProfile") -> asyncssh.SSHClientConnection:
        """Get or create a connection to the server."""
        server_lock = await self._get_server_lock(server.address)

        async with server_lock:
            pooled = self._connections.get(server.address)

            if pooled and not pooled.is_stale:
                pooled.touch()
                async with self._meta_lock:
                    self._connections.move_to_end(server.address)
                logger.debug(
                    "Reusing existing connection to %s (pool_size=%d)",
                    server.address,
                    len(self._connections),
                )
                return pooled.connection

            if pooled and pooled.is_stale:
                logger.info(
                    "Connection to %s is stale, creating new connection",
                    server.address,
                )

            await self._evict_lru_if_needed()

            logger.info(
                "Opening SSH connection to %s (%s@%s:%d)",
                server.label,
                server.privilege_user,
                server.address,
                server.port,
            )

            try:
                conn = await self._connect(server, self._known_hosts)
            except asyncssh.HostKeyNotVerifiable as e:
                if self._strict_host_key:
                    logger.error(
                        "Host key verification failed for %s: %s. "
                        "Add the host key to %s or set "
                        "INSTALL_STRICT_HOST_KEY_CHECKING=false",
                        server.address,
                        e,
                        self._known_hosts,
                    )
                    raise
                logger.warning(
                    "Host key not verified for %s (strict mode disabled): %s",
                    server.address,
                    e,
                )
                conn = await self._connect(server, None)

            async with self._meta_lock:
                self._connections[server.address] = PooledConnection(connection=conn)
                self._connections.move_to_end(server.address)

            logger.info(
                "SSH connection established to %s (pool_size=%d/%d)",
                server.address,
                len(self._connections),
                self.max_size,
            )

            if self._cleanup_task is None or self._cleanup_task.done():
                self._cleanup_task = asyncio.create_task(self._cleanup_loop())
                logger.debug("Started connection cleanup task")

            return conn

    async def _cleanup_loop(self) -> None:
        """Periodically clean up idle connections."""
        while True:
            await asyncio.sleep(self.idle_timeout // 2)
            await self._cleanup_idle()

            if not self._connections:
                logger.debug("Cleanup loop stopped - no connections remaining")
                break

    async def _cleanup_idle(self) -> None:
        """Close connections that have been idle too long."""
        async with self._meta_lock:
            addresses = list(self._connections.keys())

        cutoff = datetime.now() - timedelta(seconds=self.idle_timeout)

        for address in addresses:
            server_lock = await self._get_server_lock(address)
            async with server_lock:
                pooled = self._connections.get(address)
                if pooled and (pooled.last_used < cutoff or pooled.is_stale):
                    reason = "stale" if pooled.is_stale else "idle"
                    logger.info(
                        "Closing %s connection to %s (pool_size=%d)",
                        reason,
                        address,
                        len(self._connections) - 1,
                    )
                    pooled.connection.close()
                    del self._connections[address]

    async def close_all(self) -> None:
        """Close all connections."""
        async with self._meta_lock:
            addresses = list(self._connections.keys())

        if addresses:
            logger.info("Closing all %d connection(s)", len(addresses))
            for address in addresses:
                await self.remove_connection(address)

        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()

    async def remove_connection(self, address: str) -> None:
        """Remove a specific connection from the pool.

        Args:
            address: Address of the server to remove.
        """
        server_lock = await self._get_server_lock(address)
        async with server_lock:
            pooled = self._connections.pop(address, None)
            if pooled is not None:
                logger.info(
                    "Removing connection to %s (pool_size=%d)",
                    address,
                    len(self._connections),
                )
                pooled.connection.close()

    @property
    def pool_size(self) -> int:
        """Return the current number of connections in the pool."""
        return len(self._connections)

    @property
    def active_servers(self) -> list[str]:
        """Return addresses with active connections."""
        return list(self._connections.keys())
