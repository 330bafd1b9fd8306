"""Tests for svnmcp.mcp.server module."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
from mcp.types import TextContent

from svnmcp.core.config import SvnConfig
from svnmcp.core.errors import ErrorKind, SvnError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.mcp.server import SvnMCPServer, create_mcp_server
from svnmcp.svn.client import SvnClient
from svnmcp.svn.executor import SvnExecutor
from svnmcp.svn.resolver import PathResolver

LOG_XML = """<log>
<logentry revision="12"><author>alice</author><date>2024-01-05T15:04:05Z</date>
<paths><path action="M" kind="file">/trunk/a.c</path></paths>
<msg>Fix overflow</msg></logentry>
</log>"""


class ScriptedExecutor(SvnExecutor):
    """Returns one canned result for every command and records arguments."""

    def __init__(self, result: Result[str, SvnError]) -> None:
        super().__init__(SvnConfig())
        self.result = result
        self.calls: list[tuple[str, list[str], bool]] = []

    async def execute(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        use_credentials: bool = False,
        working_dir: Path | None = None,
        timeout_ms: int | None = None,
    ) -> Result[str, SvnError]:
        self.calls.append((command, list(args), use_credentials))
        return self.result


class ExplodingExecutor(SvnExecutor):
    async def execute(self, *args: object, **kwargs: object) -> Result[str, SvnError]:
        raise RuntimeError("kaboom")


def _server(tmp_path: Path, result: Result[str, SvnError]) -> tuple[SvnMCPServer, ScriptedExecutor]:
    config = SvnConfig(repo_url="https://svn.example.com/repo")
    executor = ScriptedExecutor(result)
    client = SvnClient(config, resolver=PathResolver(config, cwd=tmp_path), executor=executor)
    return SvnMCPServer(config, client), executor


def _text(result: object) -> str:
    content = getattr(result, "content")
    assert isinstance(content[0], TextContent)
    return content[0].text


class TestTools:
    def test_tool_names(self) -> None:
        server = SvnMCPServer(SvnConfig())
        assert [t.name for t in server.get_tools()] == [
            "svn_info",
            "svn_status",
            "svn_log",
            "svn_diff",
            "svn_blame",
            "svn_cat",
        ]

    def test_required_paths(self) -> None:
        tools = {t.name: t for t in SvnMCPServer(SvnConfig()).get_tools()}
        assert tools["svn_blame"].inputSchema["required"] == ["path"]
        assert tools["svn_cat"].inputSchema["required"] == ["path"]
        assert "required" not in tools["svn_log"].inputSchema

    def test_defaults(self) -> None:
        tools = {t.name: t for t in SvnMCPServer(SvnConfig()).get_tools()}
        log_props = tools["svn_log"].inputSchema["properties"]
        assert log_props["limit"]["default"] == 10
        assert log_props["verbose"]["default"] is False
        status_props = tools["svn_status"].inputSchema["properties"]
        assert status_props["show_unversioned"]["default"] is True

    def test_create_server(self) -> None:
        server = create_mcp_server(SvnConfig())
        assert server.name == "svn-mcp"


class TestCallTool:
    @pytest.mark.asyncio
    async def test_log(self, tmp_path: Path) -> None:
        server, executor = _server(tmp_path, Ok(LOG_XML))

        result = await server.call_tool("svn_log", {"limit": 5, "verbose": True})

        assert result.isError is False
        text = _text(result)
        assert "r12 | alice | Jan 5, 2024, 03:04 PM" in text
        assert "  M /trunk/a.c" in text
        command, args, _ = executor.calls[0]
        assert command == "log"
        assert args[:4] == ["--xml", "-l", "5", "-v"]

    @pytest.mark.asyncio
    async def test_log_default_limit(self, tmp_path: Path) -> None:
        server, executor = _server(tmp_path, Ok("<log></log>"))

        result = await server.call_tool("svn_log", None)

        assert _text(result) == "No log entries found."
        assert executor.calls[0][1][:3] == ["--xml", "-l", "10"]

    @pytest.mark.asyncio
    async def test_svn_error_is_text(self, tmp_path: Path) -> None:
        error = SvnError(ErrorKind.AUTH_FAILED, "SVN authentication failed. Check your credentials.")
        server, _ = _server(tmp_path, Err(error))

        result = await server.call_tool("svn_info", {"path": "https://svn.example.com/repo"})

        assert result.isError is False
        assert _text(result) == (
            "Error: SVN authentication failed. Check your credentials.\nCode: AUTH_FAILED"
        )

    @pytest.mark.asyncio
    async def test_status_outside_working_copy(self, tmp_path: Path) -> None:
        server, executor = _server(tmp_path, Ok(""))

        result = await server.call_tool("svn_status", {})

        assert "Code: NOT_WORKING_COPY" in _text(result)
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_blame_requires_path(self, tmp_path: Path) -> None:
        server, _ = _server(tmp_path, Ok(""))

        result = await server.call_tool("svn_blame", {})

        assert "Code: FILE_NOT_FOUND" in _text(result)

    @pytest.mark.asyncio
    async def test_cat_range(self, tmp_path: Path) -> None:
        server, _ = _server(tmp_path, Ok("one\ntwo\nthree"))

        result = await server.call_tool(
            "svn_cat",
            {"path": "https://svn.example.com/repo/a.c", "start_line": 2, "end_line": 3},
        )

        assert _text(result).splitlines() == [
            "File: https://svn.example.com/repo/a.c",
            "Lines 2 to 3 of 3",
            "2: two",
            "3: three",
        ]

    @pytest.mark.asyncio
    async def test_diff_change(self, tmp_path: Path) -> None:
        server, executor = _server(tmp_path, Ok("Index: a.c\n"))

        result = await server.call_tool("svn_diff", {"change": 42})

        assert _text(result).startswith("Changes in revision 42:")
        assert executor.calls[0][1][:2] == ["-c", "42"]
        assert executor.calls[0][2] is True

    @pytest.mark.asyncio
    async def test_unknown_tool(self, tmp_path: Path) -> None:
        server, _ = _server(tmp_path, Ok(""))

        result = await server.call_tool("svn_commit", {})

        assert result.isError is True
        assert _text(result) == "Unknown tool: svn_commit"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, tmp_path: Path) -> None:
        config = SvnConfig()
        client = SvnClient(
            config,
            resolver=PathResolver(config, cwd=tmp_path),
            executor=ExplodingExecutor(config),
        )
        server = SvnMCPServer(config, client)

        result = await server.call_tool("svn_cat", {"path": "https://svn.example.com/repo/a.c"})

        assert result.isError is True
        assert "kaboom" in _text(result)

        # the server keeps answering afterwards
        again = await server.call_tool("svn_unknown", {})
        assert again.isError is True
