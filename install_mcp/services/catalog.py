"""Curated catalog of installable software."""

from typing import Final

from install_mcp.exceptions import CatalogEntryNotFoundError
from install_mcp.models import PackageCatalogEntry

CATALOG: Final[tuple[PackageCatalogEntry, ...]] = (
    PackageCatalogEntry("nginx", "Web server", "apt install -y nginx"),
    PackageCatalogEntry("python3", "Python programming language", "apt install -y python3"),
    PackageCatalogEntry("nodejs", "JavaScript runtime", "apt install -y nodejs npm"),
    PackageCatalogEntry("git", "Version control system", "apt install -y git"),
    PackageCatalogEntry("docker", "Container platform", "apt install -y docker.io"),
    PackageCatalogEntry(
        "postgresql", "SQL database", "apt install -y postgresql postgresql-contrib"
    ),
    PackageCatalogEntry(
        "mysql", "MySQL database", "apt install -y mysql-server mysql-client"
    ),
    PackageCatalogEntry("vim", "Text editor", "apt install -y vim"),
    PackageCatalogEntry(
        "curl", "Command line tool for transferring data", "apt install -y curl"
    ),
    PackageCatalogEntry(
        "wget", "Command line tool for retrieving files", "apt install -y wget"
    ),
)


def find_catalog_entry(key: str) -> PackageCatalogEntry | None:
    """Look up a catalog entry by exact, case-sensitive name.

    Returns:
        Matching entry, or None if the key is not listed
    """
    for entry in CATALOG:
        if entry.name == key:
            return entry
    return None


def resolve_catalog_entry(key: str) -> PackageCatalogEntry:
    """Look up a catalog entry or fail.

    Raises:
        CatalogEntryNotFoundError: If the key is not listed
    """
    entry = find_catalog_entry(key)
    if entry is None:
        raise CatalogEntryNotFoundError(key)
    return entry


def format_catalog() -> str:
    """Format the catalog as a plain-text listing."""
    width = max(len(entry.name) for entry in CATALOG)
    lines = ["Software Catalog", "=" * 40, ""]
    for entry in CATALOG:
        lines.append(f"{entry.name:<{width}}  {entry.description}")
        lines.append(f"{'':<{width}}  {entry.install_command}")
    lines.append("")
    lines.append("Install with software_type='common' and the name above,")
    lines.append("or software_type='custom' and any package name.")
    return "\n".join(lines)
