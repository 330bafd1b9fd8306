from __future__ import annotations

import asyncio

from svnmcp.cli.context import build_context
from svnmcp.mcp.server import run_mcp_server


def serve() -> None:
    """Run the MCP server on stdio."""
    ctx = build_context()
    asyncio.run(run_mcp_server(ctx.config))
