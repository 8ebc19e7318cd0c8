"""install_mcp: remote software installation over SSH."""

__version__ = "0.1.0"
