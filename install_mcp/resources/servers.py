"""Servers resource for listing registered servers."""

from install_mcp.services import family_for, get_config


async def list_servers_resource() -> str:
    """List registered servers and the package manager targeted on each.

    Privilege secrets are never included.

    Returns:
        Formatted list of registered servers
    """
    config = get_config()
    servers = config.get_servers()

    if not servers:
        return "No servers registered."

    lines = ["Registered Servers", "=" * 40, ""]

    for address, server in sorted(servers.items()):
        mode = "direct" if server.is_root else "sudo"
        lines.append(f"{server.label} ({address})")
        lines.append(f"    SSH:      {server.privilege_user}@{address}:{server.port}")
        lines.append(f"    Packages: {family_for(server).value} ({mode})")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
