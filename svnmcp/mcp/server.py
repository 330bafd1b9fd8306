"""MCP server exposing read-only svn tools over stdio."""

from collections.abc import Callable
from typing import Any

from loguru import logger
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import (
    CallToolResult,
    ServerCapabilities,
    TextContent,
    Tool,
)

from .. import __version__
from ..core.config import SvnConfig
from ..core.errors import ParseError, SvnError
from ..core.result import Err, Ok, Result
from ..output.errors import format_error
from ..output.format import (
    format_blame,
    format_cat,
    format_diff,
    format_info,
    format_log,
    format_status,
)
from ..svn.client import DEFAULT_LOG_LIMIT, SvnClient

SERVER_NAME = "svn-mcp"


def _text(text: str, *, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def _render[T](result: Result[T, SvnError | ParseError], render: Callable[[T], str]) -> CallToolResult:
    """Render an Ok value with ``render``; an Err becomes the error text block."""
    match result:
        case Ok(value):
            return _text(render(value))
        case Err(error):
            return _text(format_error(error))


def _opt_str(args: dict[str, Any], key: str) -> str | None:
    value = args.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _opt_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if value is None or isinstance(value, bool):
        return None
    number = int(value)
    # 0 means "not given", as for an omitted argument
    return number or None


def _opt_bool(args: dict[str, Any], key: str, default: bool) -> bool:
    value = args.get(key)
    if value is None:
        return default
    return bool(value)


class SvnMCPServer:
    """MCP tool handlers backed by one ``SvnClient``.

    Each handler resolves its arguments, calls the client and turns the
    Result into text. svn failures are returned as ordinary text content
    (``Error: ...``); only unknown tools and unexpected exceptions are
    flagged with ``isError``.
    """

    def __init__(self, config: SvnConfig, client: SvnClient | None = None):
        self.config = config
        self.client = client or SvnClient(config)

    def get_tools(self) -> list[Tool]:
        """Get available MCP tools."""
        line_props = {
            "start_line": {
                "type": "integer",
                "description": "Start line number for output",
            },
            "end_line": {
                "type": "integer",
                "description": "End line number for output",
            },
        }

        return [
            Tool(
                name="svn_info",
                description=(
                    "Get SVN repository and working copy information including URL, "
                    "revision, branch type, and last commit details"
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": (
                                "Path or URL to query (defaults to current working copy or configured repo)"
                            ),
                        },
                    },
                },
            ),
            Tool(
                name="svn_status",
                description="Show modified, added, deleted, and untracked files in the SVN working copy",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "Working copy path to check (defaults to current directory)",
                        },
                        "show_unversioned": {
                            "type": "boolean",
                            "description": "Include unversioned files in output",
                            "default": True,
                        },
                    },
                },
            ),
            Tool(
                name="svn_log",
                description=(
                    "Show SVN commit history for repository or specific file. "
                    "Uses local working copy when possible to avoid network calls."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "File or directory path to show history for",
                        },
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of log entries to show",
                            "default": DEFAULT_LOG_LIMIT,
                            "minimum": 1,
                        },
                        "revision": {
                            "type": "string",
                            "description": 'Revision or revision range (e.g., "1000:HEAD", "BASE:HEAD")',
                        },
                        "verbose": {
                            "type": "boolean",
                            "description": "Include list of changed paths in each commit",
                            "default": False,
                        },
                        "search": {
                            "type": "string",
                            "description": "Search pattern to filter log messages",
                        },
                    },
                },
            ),
            Tool(
                name="svn_diff",
                description=(
                    "Show differences between working copy and BASE, or between revisions. "
                    "Returns unified diff format."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "File or directory path to diff",
                        },
                        "revision": {
                            "type": "string",
                            "description": 'Revision range (e.g., "1000:1005", "BASE:HEAD")',
                        },
                        "change": {
                            "type": "integer",
                            "description": "Show changes made in a specific revision number",
                        },
                    },
                },
            ),
            Tool(
                name="svn_blame",
                description=(
                    "Show line-by-line annotation of a file with revision and author "
                    "information for each line"
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "File path to annotate (required)",
                        },
                        "revision": {
                            "type": "string",
                            "description": "Annotate up to this revision",
                        },
                        **line_props,
                    },
                    "required": ["path"],
                },
            ),
            Tool(
                name="svn_cat",
                description=(
                    "Show contents of a file at a specific revision. "
                    "Useful for viewing historical versions of a file."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "File path to show (required)",
                        },
                        "revision": {
                            "type": "string",
                            "description": (
                                'Revision to show (e.g., "1000", "HEAD", "BASE"). '
                                "Defaults to working copy version."
                            ),
                        },
                        **line_props,
                    },
                    "required": ["path"],
                },
            ),
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> CallToolResult:
        """Handle tool calls."""
        args = arguments or {}
        handlers = {
            "svn_info": self._svn_info,
            "svn_status": self._svn_status,
            "svn_log": self._svn_log,
            "svn_diff": self._svn_diff,
            "svn_blame": self._svn_blame,
            "svn_cat": self._svn_cat,
        }
        handler = handlers.get(name)
        if handler is None:
            return _text(f"Unknown tool: {name}", is_error=True)

        logger.debug(f"tool call: {name} {args}")
        try:
            return await handler(args)
        except Exception as e:
            logger.exception(f"Tool call failed: {name}")
            return _text(f"Tool execution failed: {e}", is_error=True)

    async def _svn_info(self, args: dict[str, Any]) -> CallToolResult:
        result = await self.client.info(_opt_str(args, "path"))
        return _render(result, format_info)

    async def _svn_status(self, args: dict[str, Any]) -> CallToolResult:
        show_unversioned = _opt_bool(args, "show_unversioned", True)
        result = await self.client.status(_opt_str(args, "path"))
        return _render(result, lambda entries: format_status(entries, show_unversioned=show_unversioned))

    async def _svn_log(self, args: dict[str, Any]) -> CallToolResult:
        verbose = _opt_bool(args, "verbose", False)
        result = await self.client.log(
            _opt_str(args, "path"),
            limit=_opt_int(args, "limit") or DEFAULT_LOG_LIMIT,
            revision=_opt_str(args, "revision"),
            verbose=verbose,
            search=_opt_str(args, "search"),
        )
        return _render(result, lambda entries: format_log(entries, verbose=verbose))

    async def _svn_diff(self, args: dict[str, Any]) -> CallToolResult:
        revision = _opt_str(args, "revision")
        change = _opt_int(args, "change")
        result = await self.client.diff(_opt_str(args, "path"), revision=revision, change=change)
        return _render(result, lambda output: format_diff(output, revision=revision, change=change))

    async def _svn_blame(self, args: dict[str, Any]) -> CallToolResult:
        path = _opt_str(args, "path") or ""
        start_line = _opt_int(args, "start_line")
        end_line = _opt_int(args, "end_line")
        result = await self.client.blame(
            path,
            revision=_opt_str(args, "revision"),
            start_line=start_line,
            end_line=end_line,
        )
        return _render(
            result,
            lambda lines: format_blame(lines, path, start_line=start_line, end_line=end_line),
        )

    async def _svn_cat(self, args: dict[str, Any]) -> CallToolResult:
        path = _opt_str(args, "path") or ""
        revision = _opt_str(args, "revision")
        result = await self.client.cat(path, revision=revision)
        return _render(
            result,
            lambda content: format_cat(
                content,
                path,
                revision=revision,
                start_line=_opt_int(args, "start_line"),
                end_line=_opt_int(args, "end_line"),
            ),
        )


def create_mcp_server(config: SvnConfig, client: SvnClient | None = None) -> Server:
    """Create and configure the MCP server."""
    server = Server(SERVER_NAME)
    svn_server = SvnMCPServer(config, client)

    @server.list_tools()
    async def handle_list_tools() -> list[Tool]:
        """List available tools."""
        return svn_server.get_tools()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict | None):
        """Handle tool calls."""
        result = await svn_server.call_tool(name, arguments)
        if result.isError:
            text = "\n".join(c.text for c in result.content if isinstance(c, TextContent))
            raise RuntimeError(text)
        return result.content

    return server


async def run_mcp_server(config: SvnConfig) -> None:
    """Run the MCP server using stdio transport.

    A missing svn binary is reported as a warning; each tool call then
    returns an SVN_NOT_INSTALLED error.
    """
    client = SvnClient(config)
    if not await client.executor.is_installed():
        logger.warning("svn binary not found on PATH; tool calls will fail until Subversion is installed")

    server = create_mcp_server(config, client)
    init_options = InitializationOptions(
        server_name=SERVER_NAME,
        server_version=__version__,
        capabilities=ServerCapabilities(tools={"listChanged": False}),
    )

    logger.info(f"{SERVER_NAME} {__version__} listening on stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, init_options)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
    except Exception as e:
        logger.error(f"MCP server error: {e}")
        raise
