"""Error handling middleware for consistent error logging."""

import logging
import traceback
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from install_mcp.exceptions import InstallError
from install_mcp.middleware.base import InstallMiddleware


class ErrorHandlingMiddleware(InstallMiddleware):
    """Logs exceptions escaping MCP handlers, then re-raises them.

    Install errors carry their HTTP status in the log line. Anything else
    is an unexpected crash and may include the traceback.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to log tracebacks of unexpected errors.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log and re-raise errors from the next handler."""
        try:
            return await call_next(context)
        except InstallError as e:
            self.logger.error(
                "%s failed with %s (%d): %s",
                context.method,
                type(e).__name__,
                e.status_code,
                e,
            )
            raise
        except Exception as e:
            if self.include_traceback:
                self.logger.error(
                    "Unexpected error in %s: %s: %s\n%s",
                    context.method,
                    type(e).__name__,
                    e,
                    traceback.format_exc(),
                )
            else:
                self.logger.error(
                    "Unexpected error in %s: %s: %s", context.method, type(e).__name__, e
                )
            raise
