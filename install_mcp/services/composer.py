"""Install command composition.

Catalog verbs and custom requests share one canonical form
(``apt install -y ...``). The composer picks the target's package-manager
family from its privilege profile and translates the install verb at the
last step:

- ``root`` servers are treated as apk-based: ``apk update && apk add ...``
- other users are treated as apt-based and escalate through ``sudo -S``
  with the privilege secret piped on stdin.

The privilege secret is inserted verbatim. It comes from the server
registry, not from the request, and is deliberately not passed through
the package name sanitizer.
"""

import logging

from install_mcp.exceptions import InvalidRequest
from install_mcp.models import (
    ComposedCommand,
    InstallMode,
    PackageManagerFamily,
    ServerProfile,
)
from install_mcp.services.catalog import resolve_catalog_entry
from install_mcp.services.sanitizer import sanitize_package_name

logger = logging.getLogger(__name__)

CANONICAL_FAMILY = PackageManagerFamily.APT


def parse_mode(mode: InstallMode | str) -> InstallMode:
    """Convert a mode selector to InstallMode.

    Raises:
        InvalidRequest: If the selector is not a known mode
    """
    if isinstance(mode, InstallMode):
        return mode
    try:
        return InstallMode(mode)
    except ValueError:
        raise InvalidRequest(f"Invalid software type: {mode!r}") from None


def build_install_command(mode: InstallMode | str, selector: str) -> str:
    """Build the canonical (apt-style) install command for a request.

    Args:
        mode: Catalog or custom selection
        selector: Catalog key, or free-text package name

    Returns:
        Install command such as ``apt install -y nginx``

    Raises:
        InvalidRequest: If the mode is unknown or the custom name is empty
            after sanitization
        CatalogEntryNotFoundError: If the catalog key is not listed
    """
    install_mode = parse_mode(mode)

    if install_mode is InstallMode.CATALOG:
        return resolve_catalog_entry(selector).install_command

    package = sanitize_package_name(selector)
    if not package:
        raise InvalidRequest("Custom software name is required")
    if package != selector.strip():
        logger.warning("Custom package name sanitized: %r -> %r", selector, package)
    return f"{CANONICAL_FAMILY.install_prefix} {package}"


def family_for(server: ServerProfile) -> PackageManagerFamily:
    """Package-manager family targeted on a server."""
    if server.is_root:
        return PackageManagerFamily.APK
    return PackageManagerFamily.APT


def translate_install_command(
    command: str,
    source: PackageManagerFamily,
    target: PackageManagerFamily,
) -> str:
    """Rewrite the install verb of a command from one family to another.

    Args:
        command: Install command in ``source`` syntax
        source: Family the command is written for
        target: Family to translate to

    Returns:
        Command with every ``source`` install verb replaced
    """
    if source is target:
        return command
    return command.replace(source.install_prefix, target.install_prefix)


def compose_command(install_command: str, server: ServerProfile) -> ComposedCommand:
    """Compose the full command line to run on a server.

    Args:
        install_command: Canonical install command from build_install_command
        server: Target server profile

    Returns:
        ComposedCommand with the exact text to execute
    """
    family = family_for(server)

    if family is PackageManagerFamily.APK:
        install = translate_install_command(install_command, CANONICAL_FAMILY, family)
        text = f"apk update && {install}"
    else:
        # Normalizes apk verbs back to apt. Catalog and custom commands are
        # apt-style already, so this only matters if an apk-form command
        # reaches a sudo server; unverified whether that can happen.
        install = translate_install_command(
            install_command, PackageManagerFamily.APK, family
        )
        secret = server.privilege_secret
        text = (
            f"echo '{secret}' | sudo -S apt update && "
            f"echo '{secret}' | sudo -S {install}"
        )

    return ComposedCommand(
        text=text,
        server_address=server.address,
        family=family,
        install_command=install,
    )
