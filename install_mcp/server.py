"""install_mcp FastMCP server.

Wires the install tools, catalog and server resources, and HTTP routes
together. Business logic lives in services/.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from install_mcp.config import Settings
from install_mcp.dependencies import Dependencies
from install_mcp.exceptions import InstallError
from install_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from install_mcp.models import InstallMode, InstallRequest
from install_mcp.resources import catalog_resource, list_servers_resource
from install_mcp.services import get_config, get_runner, run_install, set_pool, set_runner
from install_mcp.tools import install_software, preview_install
from install_mcp.utils.console import ColorfulFormatter

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncssh",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure logging for the install_mcp package.

    Called at module load time so loggers are configured however the
    server is started.
    """
    log_level = os.getenv("INSTALL_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("INSTALL_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("install_mcp")
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Load the server registry and own the SSH pool for the server's lifetime.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with registered server addresses
    """
    logger.info("install_mcp server starting up")

    deps = Dependencies.from_config(get_config())
    set_pool(deps.pool)
    set_runner(deps.runner)

    servers = deps.config.get_servers()
    logger.info(
        "Loaded %d server(s): %s",
        len(servers),
        ", ".join(sorted(servers)) if servers else "(none)",
    )
    logger.info("install_mcp server ready to accept connections")

    try:
        yield {"servers": list(servers)}
    finally:
        logger.info("install_mcp server shutting down")
        if deps.pool.pool_size > 0:
            logger.info(
                "Closing %d active SSH connection(s): %s",
                deps.pool.pool_size,
                ", ".join(deps.pool.active_servers),
            )
        await deps.cleanup()
        logger.info("install_mcp server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add middleware: ErrorHandling (innermost), then Logging.

    Args:
        server: The FastMCP server to configure.
        settings: Settings providing logging options.
    """
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


async def install_route(request: Request) -> PlainTextResponse:
    """Handle the install form.

    Form fields: server_ip, software_type ("common" or "custom"),
    common_software, custom_software.
    """
    if request.method != "POST":
        return PlainTextResponse("Method not allowed", status_code=405)

    form = await request.form()
    software_type = str(form.get("software_type", ""))
    if software_type == InstallMode.CUSTOM.value:
        selector = str(form.get("custom_software", ""))
    else:
        selector = str(form.get("common_software", ""))

    install_request = InstallRequest(
        server_address=str(form.get("server_ip", "")),
        mode=software_type,
        selector=selector,
    )

    try:
        report = await run_install(install_request, get_config(), get_runner())
    except InstallError as e:
        return PlainTextResponse(str(e), status_code=e.status_code)

    return PlainTextResponse(report)


def create_server() -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    settings = Settings.from_env()
    server = FastMCP("install_mcp", lifespan=app_lifespan)

    configure_middleware(server, settings)

    server.tool()(install_software)
    server.tool()(preview_install)

    server.resource("software://catalog")(catalog_resource)
    server.resource("servers://list")(list_servers_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    server.custom_route("/install", methods=["GET", "POST"])(install_route)

    return server


# Default server instance
mcp = create_server()
