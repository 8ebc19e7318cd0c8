"""Tests for the software catalog."""

import pytest

from install_mcp.exceptions import CatalogEntryNotFoundError, InvalidRequest
from install_mcp.services.catalog import (
    CATALOG,
    find_catalog_entry,
    format_catalog,
    resolve_catalog_entry,
)

EXPECTED_NAMES = [
    "nginx",
    "python3",
    "nodejs",
    "git",
    "docker",
    "postgresql",
    "mysql",
    "vim",
    "curl",
    "wget",
]


def test_catalog_has_expected_entries():
    """Catalog lists the ten curated packages in order."""
    assert [entry.name for entry in CATALOG] == EXPECTED_NAMES


def test_catalog_verbs_are_apt_style():
    """Every catalog verb uses the canonical apt form."""
    for entry in CATALOG:
        assert entry.install_command.startswith("apt install -y ")


@pytest.mark.parametrize(
    ("key", "command"),
    [
        ("nginx", "apt install -y nginx"),
        ("nodejs", "apt install -y nodejs npm"),
        ("docker", "apt install -y docker.io"),
        ("postgresql", "apt install -y postgresql postgresql-contrib"),
        ("mysql", "apt install -y mysql-server mysql-client"),
    ],
)
def test_find_returns_entry(key: str, command: str):
    """Listed keys resolve to their install verb."""
    entry = find_catalog_entry(key)
    assert entry is not None
    assert entry.install_command == command


@pytest.mark.parametrize("key", ["", "Nginx", "NGINX", "ngin", "nginx ", "apache2", "git;id"])
def test_find_unlisted_returns_none(key: str):
    """Lookups are exact and case-sensitive, never fuzzy."""
    assert find_catalog_entry(key) is None


def test_resolve_raises_for_unlisted_key():
    """resolve_catalog_entry raises a bad-request lookup error."""
    with pytest.raises(CatalogEntryNotFoundError, match="Selected software not found") as exc:
        resolve_catalog_entry("apache2")

    assert isinstance(exc.value, InvalidRequest)
    assert exc.value.key == "apache2"
    assert exc.value.status_code == 400


def test_entries_are_immutable():
    """Catalog entries cannot be modified."""
    with pytest.raises(AttributeError):
        CATALOG[0].install_command = "rm -rf /"  # type: ignore[misc]


def test_format_catalog_lists_every_entry():
    """Formatted catalog names and describes every entry."""
    text = format_catalog()
    for entry in CATALOG:
        assert entry.name in text
        assert entry.description in text
