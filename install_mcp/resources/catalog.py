"""Catalog resource listing installable software."""

from install_mcp.services.catalog import format_catalog


async def catalog_resource() -> str:
    """List the curated software catalog."""
    return format_catalog()
