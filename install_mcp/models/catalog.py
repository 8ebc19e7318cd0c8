"""Software catalog data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PackageCatalogEntry:
    """A pre-vetted package that can be installed by key."""

    name: str
    description: str
    install_command: str
