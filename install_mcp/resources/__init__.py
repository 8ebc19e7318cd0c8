"""MCP resources for install_mcp."""

from install_mcp.resources.catalog import catalog_resource
from install_mcp.resources.servers import list_servers_resource

__all__ = ["catalog_resource", "list_servers_resource"]
