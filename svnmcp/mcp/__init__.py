"""MCP integration for svn-mcp."""

from .server import SvnMCPServer, create_mcp_server, run_mcp_server

__all__ = ["SvnMCPServer", "create_mcp_server", "run_mcp_server"]
