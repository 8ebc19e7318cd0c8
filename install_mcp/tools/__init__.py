"""MCP tools for install_mcp."""

from install_mcp.tools.install import install_software, preview_install

__all__ = ["install_software", "preview_install"]
