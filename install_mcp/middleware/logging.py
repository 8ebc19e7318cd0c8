"""Logging middleware for install requests and resource reads."""

import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from install_mcp.middleware.base import InstallMiddleware
from install_mcp.services.reporter import FAILURE_MARKER, SUCCESS_MARKER

INSTALL_TOOLS = frozenset({"install_software", "preview_install"})


def result_text(result: Any) -> str:
    """Extract the text of a tool or resource result."""
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    content = getattr(result, "content", None)
    if isinstance(content, (list, tuple)):
        return "".join(getattr(item, "text", "") or "" for item in content)
    if isinstance(content, str):
        return content
    return ""


def classify_outcome(tool_name: str, text: str) -> str:
    """Name the outcome of an install tool call from its text.

    Returns one of "rejected", "previewed", "executed", "failed" or
    "unknown". Only the first marker line counts, so markers inside the
    remote output do not change the result.
    """
    if text.startswith("Error:"):
        return "rejected"
    if tool_name == "preview_install":
        return "previewed"
    for line in text.splitlines():
        if line.startswith(FAILURE_MARKER):
            return "failed"
        if line.startswith(SUCCESS_MARKER):
            return "executed"
    return "unknown"


def describe_target(args: dict[str, Any] | None) -> str:
    """Render server, mode and package of an install call on one line."""
    args = args or {}
    return "server={!r} type={!r} software={!r}".format(
        args.get("server_address", ""),
        args.get("software_type", "common"),
        args.get("software", ""),
    )


class LoggingMiddleware(InstallMiddleware):
    """Logs install requests with their outcome, and resource reads.

    Example:
        >>> mcp.add_middleware(LoggingMiddleware(slow_threshold_ms=30000))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Whether to log result text at DEBUG.
            max_payload_length: Maximum logged payload length.
            slow_threshold_ms: Calls at or above this are logged at WARNING.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms

    def _elapsed(self, start: float) -> tuple[float, str]:
        duration_ms = (time.perf_counter() - start) * 1000
        suffix = " (slow)" if duration_ms >= self.slow_threshold_ms else ""
        return duration_ms, f"{duration_ms:.1f}ms{suffix}"

    def _log_payload(self, text: str) -> None:
        if not self.include_payloads or not text:
            return
        if len(text) > self.max_payload_length:
            text = text[: self.max_payload_length] + "... [truncated]"
        self.logger.debug("    Result: %s", text)

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log install tool calls with target, outcome and timing."""
        start = time.perf_counter()
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)
        target = describe_target(args) if tool_name in INSTALL_TOOLS else ""

        self.logger.info("install request: %s %s", tool_name, target)

        try:
            result = await call_next(context)
        except Exception as e:
            _, took = self._elapsed(start)
            self.logger.error(
                "install request %s crashed: %s: %s [%s]",
                tool_name,
                type(e).__name__,
                e,
                took,
            )
            raise

        duration_ms, took = self._elapsed(start)
        text = result_text(result)
        outcome = classify_outcome(tool_name, text)

        level = logging.INFO
        if outcome in ("rejected", "failed") or duration_ms >= self.slow_threshold_ms:
            level = logging.WARNING
        self.logger.log(level, "install %s: %s %s [%s]", outcome, tool_name, target, took)
        self._log_payload(text)
        return result

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log resource reads with URI, size and timing."""
        start = time.perf_counter()
        uri = str(getattr(context.message, "uri", "unknown"))

        try:
            result = await call_next(context)
        except Exception as e:
            _, took = self._elapsed(start)
            self.logger.error("resource %s failed: %s [%s]", uri, e, took)
            raise

        duration_ms, took = self._elapsed(start)
        level = logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        self.logger.log(level, "resource %s read [%s]", uri, took)
        return result
