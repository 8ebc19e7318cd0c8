"""Configuration module for install_mcp.

- Config: Main configuration class (aggregates all components)
- ServerRegistryParser: Parses the managed server registry file
- HostKeyVerifier: Manages SSH host key verification
- Settings: Environment variable configuration
"""

from install_mcp.config.host_keys import HostKeyVerifier
from install_mcp.config.main import Config
from install_mcp.config.registry import ServerRegistryParser
from install_mcp.config.settings import Settings

__all__ = ["Config", "HostKeyVerifier", "ServerRegistryParser", "Settings"]
