"""Server registry file parser.

The registry uses ssh_config-like syntax, one block per server keyed by
its address::

    Server 10.0.0.5
        Name web-1
        User deploy
        Password hunter2
        Port 2222
"""

import logging
import os
import re
from pathlib import Path

from install_mcp.models import ServerProfile

logger = logging.getLogger(__name__)


class ServerRegistryParser:
    """Parser for the managed server registry file."""

    def __init__(self, registry_path: Path | str):
        """Initialize registry parser.

        Args:
            registry_path: Path to the registry file
        """
        self.registry_path = Path(registry_path)

    def parse(self) -> dict[str, ServerProfile]:
        """Parse the registry and return server profiles.

        Returns:
            Dictionary mapping server address to ServerProfile
        """
        if not self.registry_path.exists():
            logger.warning("Server registry not found: %s", self.registry_path)
            return {}

        try:
            content = self.registry_path.read_text()
            logger.debug("Reading server registry from %s", self.registry_path)
        except OSError as e:
            logger.warning("Cannot read server registry %s: %s", self.registry_path, e)
            return {}

        servers: dict[str, ServerProfile] = {}
        current_address: str | None = None
        current_data: dict[str, str] = {}

        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            server_match = re.match(r"^Server\s+(\S+)$", line, re.IGNORECASE)
            if server_match:
                if current_address:
                    servers[current_address] = self._build(current_address, current_data)
                current_address = server_match.group(1)
                current_data = {}
                continue

            kv_match = re.match(r"^(\w+)\s+(.+)$", line)
            if kv_match and current_address:
                current_data[kv_match.group(1).lower()] = kv_match.group(2)
            elif current_address is None:
                logger.debug("Ignoring registry line outside a Server block: %s", line)

        if current_address:
            servers[current_address] = self._build(current_address, current_data)

        logger.info("Parsed %d server(s) from %s", len(servers), self.registry_path)
        return servers

    def _build(self, address: str, data: dict[str, str]) -> ServerProfile:
        """Build a ServerProfile from a parsed block."""
        try:
            port = int(data.get("port", "22"))
        except ValueError:
            logger.warning("Invalid port for %s: %s, using 22", address, data["port"])
            port = 22

        identity_file = data.get("identityfile")
        if identity_file:
            identity_file = os.path.expanduser(identity_file)

        return ServerProfile(
            address=address,
            privilege_user=data.get("user", "root"),
            privilege_secret=data.get("password", ""),
            port=port,
            name=data.get("name"),
            identity_file=identity_file,
        )
