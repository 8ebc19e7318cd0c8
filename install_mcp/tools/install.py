"""Install tools for remote software installation via SSH."""

import logging

from install_mcp.exceptions import InstallError
from install_mcp.models import InstallRequest
from install_mcp.services import get_config, get_runner, prepare_install, run_install
from install_mcp.services.reporter import redact_text

logger = logging.getLogger(__name__)


async def install_software(
    server_address: str,
    software_type: str = "common",
    software: str = "",
) -> str:
    """Install a package on a registered server.

    Args:
        server_address: Address of a server from servers://list.
        software_type: 'common' to install a catalog entry from
            software://catalog, or 'custom' for any package name.
        software: Catalog key (e.g. "nginx") or custom package name.
            Custom names are reduced to a single token with shell
            metacharacters removed.

    Examples:
        install_software("10.0.0.5", "common", "nginx")
        install_software("10.0.0.5", "custom", "htop")

    Returns:
        Installation log with the executed command, a success or failure
        marker, and the remote output. Rejected requests return a string
        starting with "Error:".
    """
    config = get_config()
    request = InstallRequest(server_address, software_type, software)
    try:
        return await run_install(request, config, get_runner())
    except InstallError as e:
        return f"Error: {e}"


async def preview_install(
    server_address: str,
    software_type: str = "common",
    software: str = "",
) -> str:
    """Show the command install_software would run, without running it.

    Takes the same arguments as install_software. The privilege secret
    is always masked in the preview.
    """
    config = get_config()
    request = InstallRequest(server_address, software_type, software)

    try:
        prepared = prepare_install(request, config)
    except InstallError as e:
        return f"Error: {e}"

    command = prepared.command
    return "\n".join(
        [
            f"Server: {command.server_address}",
            f"Package manager: {command.family.value}",
            f"Install: {command.install_command}",
            f"Command: {redact_text(command.text, [prepared.server.privilege_secret])}",
        ]
    )
