"""Services for install_mcp."""

from install_mcp.services.catalog import (
    CATALOG,
    find_catalog_entry,
    format_catalog,
    resolve_catalog_entry,
)
from install_mcp.services.composer import (
    build_install_command,
    compose_command,
    family_for,
    translate_install_command,
)
from install_mcp.services.connection import (
    SSHConnectionError,
    get_connection_with_retry,
)
from install_mcp.services.executors import SSHCommandRunner, run_command
from install_mcp.services.installer import (
    PreparedInstall,
    execute_command,
    lookup_server,
    prepare_install,
    run_install,
)
from install_mcp.services.pool import ConnectionPool
from install_mcp.services.reporter import render_report
from install_mcp.services.sanitizer import DISALLOWED_TOKENS, sanitize_package_name
from install_mcp.services.state import (
    get_config,
    get_pool,
    get_runner,
    reset_state,
    set_config,
    set_pool,
    set_runner,
)

__all__ = [
    "CATALOG",
    "ConnectionPool",
    "DISALLOWED_TOKENS",
    "PreparedInstall",
    "SSHCommandRunner",
    "SSHConnectionError",
    "build_install_command",
    "compose_command",
    "execute_command",
    "family_for",
    "find_catalog_entry",
    "format_catalog",
    "get_config",
    "get_connection_with_retry",
    "get_pool",
    "get_runner",
    "lookup_server",
    "prepare_install",
    "render_report",
    "reset_state",
    "resolve_catalog_entry",
    "run_command",
    "run_install",
    "sanitize_package_name",
    "set_config",
    "set_pool",
    "set_runner",
    "translate_install_command",
]
