"""Application configuration.

Delegates to specialized components:
- ServerRegistryParser: Reads the managed server registry
- HostKeyVerifier: Manages known_hosts
- Settings: Environment variables
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from install_mcp.config.host_keys import HostKeyVerifier
from install_mcp.config.registry import ServerRegistryParser
from install_mcp.config.settings import Settings
from install_mcp.models import ServerProfile

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration.

    Aggregates settings, the server registry, and known_hosts handling.
    """

    settings: Settings
    registry: ServerRegistryParser
    host_keys: HostKeyVerifier
    _servers_cache: dict[str, ServerProfile] = field(
        default_factory=dict, init=False, repr=False
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()
        host_keys = HostKeyVerifier(
            known_hosts_path=os.getenv("INSTALL_KNOWN_HOSTS"),
            strict_checking=cls._get_bool_env("INSTALL_STRICT_HOST_KEY_CHECKING", True),
        )
        return cls(
            settings=settings,
            registry=ServerRegistryParser(settings.servers_file),
            host_keys=host_keys,
        )

    @classmethod
    def from_registry_file(
        cls,
        registry_path: Path | str,
        settings: Settings | None = None,
    ) -> "Config":
        """Create config for an explicit registry file.

        Host key verification is disabled; intended for tests and local use.

        Args:
            registry_path: Path to the server registry
            settings: Settings to use (default: from environment)

        Returns:
            Configured instance
        """
        return cls(
            settings=settings or Settings.from_env(),
            registry=ServerRegistryParser(registry_path),
            host_keys=HostKeyVerifier(known_hosts_path="none", strict_checking=False),
        )

    @staticmethod
    def _get_bool_env(key: str, default: bool) -> bool:
        """Get boolean from environment; anything but "false" is true."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() != "false"

    def get_servers(self) -> dict[str, ServerProfile]:
        """Get registered servers.

        Lazy loads and caches the registry on first call.

        Returns:
            Dictionary of address to ServerProfile
        """
        if not self._servers_cache:
            self._servers_cache = self.registry.parse()
        return self._servers_cache

    def get_server(self, address: str) -> ServerProfile | None:
        """Get server by address.

        Args:
            address: Server address to look up

        Returns:
            ServerProfile if registered, None otherwise
        """
        return self.get_servers().get(address)

    @property
    def command_timeout(self) -> int:
        """Remote command timeout in seconds."""
        return self.settings.command_timeout

    @property
    def idle_timeout(self) -> int:
        """Connection idle timeout in seconds."""
        return self.settings.idle_timeout

    @property
    def max_pool_size(self) -> int:
        """Maximum connection pool size."""
        return self.settings.max_pool_size

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def redact_secrets(self) -> bool:
        """Whether privilege secrets are masked in reports."""
        return self.settings.redact_secrets

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file or None if disabled."""
        return self.host_keys.get_known_hosts_path()

    @property
    def strict_host_key_checking(self) -> bool:
        """Whether to reject unknown host keys."""
        return self.host_keys.strict_checking
