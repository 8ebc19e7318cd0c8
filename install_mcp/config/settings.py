"""Application settings from environment variables."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SERVERS_FILE = Path.home() / ".config" / "install_mcp" / "servers"


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all INSTALL_* env vars.
    """

    # Remote execution
    command_timeout: int = field(default=600)

    # Connection pool
    idle_timeout: int = field(default=60)
    max_pool_size: int = field(default=100)

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="0.0.0.0")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    # Registry and reports
    servers_file: str = field(default=str(DEFAULT_SERVERS_FILE))
    redact_secrets: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            command_timeout=cls._get_int("INSTALL_COMMAND_TIMEOUT", 600),
            idle_timeout=cls._get_int("INSTALL_IDLE_TIMEOUT", 60),
            max_pool_size=cls._get_int("INSTALL_MAX_POOL_SIZE", 100),
            transport=cls._get_transport(),
            http_host=os.getenv("INSTALL_HTTP_HOST", "0.0.0.0"),
            http_port=cls._get_int("INSTALL_HTTP_PORT", 8000),
            log_level=os.getenv("INSTALL_LOG_LEVEL", "INFO"),
            log_payloads=cls._get_bool("INSTALL_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("INSTALL_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("INSTALL_INCLUDE_TRACEBACK", False),
            servers_file=os.path.expanduser(
                os.getenv("INSTALL_SERVERS_FILE", str(DEFAULT_SERVERS_FILE))
            ),
            redact_secrets=cls._get_bool("INSTALL_REDACT_SECRETS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport ("http" or "stdio"), defaulting to http."""
        transport = os.getenv("INSTALL_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"
