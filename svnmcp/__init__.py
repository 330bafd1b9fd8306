"""Read-only Subversion access for MCP clients."""

__version__ = "1.0.0"
