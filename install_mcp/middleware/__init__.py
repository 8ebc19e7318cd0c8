"""install_mcp middleware components."""

from install_mcp.middleware.base import InstallMiddleware
from install_mcp.middleware.errors import ErrorHandlingMiddleware
from install_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "InstallMiddleware",
    "LoggingMiddleware",
]
