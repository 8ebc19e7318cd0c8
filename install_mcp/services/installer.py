"""Install pipeline: validate, compose, execute, report.

Each call is one linear pass that either raises an InstallError before
anything is sent to the server (Rejected) or returns a rendered report
(Executed). Execution failures are captured in the report, never raised,
and never retried.
"""

import logging
from dataclasses import dataclass

from install_mcp.config import Config
from install_mcp.exceptions import (
    InvalidRequest,
    RemoteExecutionError,
    ServerNotFoundError,
)
from install_mcp.models import (
    ComposedCommand,
    ExecutionOutcome,
    InstallRequest,
    ServerProfile,
)
from install_mcp.protocols import RemoteCommandRunner
from install_mcp.services.composer import build_install_command, compose_command
from install_mcp.services.reporter import redact_text, render_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedInstall:
    """A validated request with its target server and composed command."""

    request: InstallRequest
    server: ServerProfile
    command: ComposedCommand


def lookup_server(address: str, config: Config) -> ServerProfile:
    """Resolve a server address through the registry.

    Surrounding whitespace is stripped before the lookup, so a pasted
    " 10.0.0.5 " matches; a whitespace-only address counts as empty.

    Raises:
        InvalidRequest: If the address is empty
        ServerNotFoundError: If the address is not registered
    """
    address = address.strip()
    if not address:
        raise InvalidRequest("Server IP is required")

    server = config.get_server(address)
    if server is None:
        raise ServerNotFoundError(address)
    return server


def prepare_install(request: InstallRequest, config: Config) -> PreparedInstall:
    """Validate a request and compose its command without running it.

    Raises:
        InvalidRequest: If the request is malformed or names an unknown
            catalog key
        ServerNotFoundError: If the server is not registered
    """
    server = lookup_server(request.server_address, config)
    install_command = build_install_command(request.mode, request.selector)
    command = compose_command(install_command, server)
    logger.info(
        "Composed %s install for %s: %s",
        command.family.value,
        server.address,
        redact_text(command.text, [server.privilege_secret]),
    )
    return PreparedInstall(request=request, server=server, command=command)


async def execute_command(
    server: ServerProfile,
    command: ComposedCommand,
    runner: RemoteCommandRunner,
) -> ExecutionOutcome:
    """Run a composed command once and capture the outcome.

    A non-zero exit status counts as a failure. Output from stdout and
    stderr is kept either way.
    """
    try:
        result = await runner.run(server, command.text)
    except RemoteExecutionError as e:
        logger.error("Install on %s failed: %s", server.address, e.detail)
        return ExecutionOutcome(
            command=command,
            success=False,
            remote_output=e.output,
            failure_detail=e.detail,
        )

    output = result.output + result.error
    if result.returncode != 0:
        logger.warning(
            "Install on %s exited with status %d", server.address, result.returncode
        )
        return ExecutionOutcome(
            command=command,
            success=False,
            remote_output=output,
            failure_detail=f"Process exited with status {result.returncode}",
        )

    logger.info("Install on %s succeeded", server.address)
    return ExecutionOutcome(command=command, success=True, remote_output=output)


async def run_install(
    request: InstallRequest,
    config: Config,
    runner: RemoteCommandRunner,
) -> str:
    """Run the full install pipeline for one request.

    Args:
        request: Operator request
        config: Configuration holding the server registry
        runner: Remote execution transport

    Returns:
        Rendered installation log

    Raises:
        InvalidRequest: If the request is rejected before execution
        ServerNotFoundError: If the server is not registered
    """
    try:
        prepared = prepare_install(request, config)
    except (InvalidRequest, ServerNotFoundError) as e:
        logger.warning("Rejected install request %r: %s", request.summary, e)
        raise

    outcome = await execute_command(prepared.server, prepared.command, runner)
    redact = [prepared.server.privilege_secret] if config.redact_secrets else []
    return render_report(prepared.command, outcome, redact=redact)
