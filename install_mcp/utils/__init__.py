"""Utilities for install_mcp."""

from install_mcp.utils.console import ColorfulFormatter

__all__ = ["ColorfulFormatter"]
