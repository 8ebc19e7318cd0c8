"""Data models for install_mcp."""

from install_mcp.models.catalog import PackageCatalogEntry
from install_mcp.models.command import CommandResult
from install_mcp.models.install import (
    ComposedCommand,
    ExecutionOutcome,
    InstallMode,
    InstallRequest,
    PackageManagerFamily,
)
from install_mcp.models.server import ServerProfile
from install_mcp.models.ssh import PooledConnection

__all__ = [
    "CommandResult",
    "ComposedCommand",
    "ExecutionOutcome",
    "InstallMode",
    "InstallRequest",
    "PackageCatalogEntry",
    "PackageManagerFamily",
    "PooledConnection",
    "ServerProfile",
]
