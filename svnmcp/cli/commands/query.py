"""Read-only svn commands: the CLI twins of the MCP tools."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import typer

from svnmcp.cli.context import CLIContext, build_context
from svnmcp.core.errors import ParseError, SvnError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.output.errors import error_exit_code, print_error
from svnmcp.output.format import (
    format_blame,
    format_cat,
    format_diff,
    format_info,
    format_log,
    format_status,
)
from svnmcp.svn.client import DEFAULT_LOG_LIMIT


def _run[T](
    ctx: CLIContext,
    call: Coroutine[Any, Any, Result[T, SvnError | ParseError]],
    render: Callable[[T], str],
) -> None:
    match asyncio.run(call):
        case Ok(value):
            ctx.console.text(render(value))
        case Err(error):
            print_error(error, ctx.console)
            raise typer.Exit(code=error_exit_code(error))


def info(
    path: str | None = typer.Argument(None, help="Path or URL (defaults to working copy or configured repo)"),
) -> None:
    """Show repository and working copy information."""
    ctx = build_context()
    _run(ctx, ctx.client.info(path), format_info)


def status(
    path: str | None = typer.Argument(None, help="Working copy path (defaults to current directory)"),
    show_unversioned: bool = typer.Option(
        True, "--unversioned/--no-unversioned", help="Include unversioned files"
    ),
) -> None:
    """Show changed files in a working copy."""
    ctx = build_context()
    _run(
        ctx,
        ctx.client.status(path),
        lambda entries: format_status(entries, show_unversioned=show_unversioned),
    )


def log(
    path: str | None = typer.Argument(None, help="File or directory path"),
    limit: int = typer.Option(DEFAULT_LOG_LIMIT, "--limit", "-l", min=1, help="Maximum number of entries"),
    revision: str | None = typer.Option(None, "--revision", "-r", help='Revision or range, e.g. "1000:HEAD"'),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Include changed paths"),
    search: str | None = typer.Option(None, "--search", help="Filter log messages by pattern"),
) -> None:
    """Show commit history."""
    ctx = build_context()
    _run(
        ctx,
        ctx.client.log(path, limit=limit, revision=revision, verbose=verbose, search=search),
        lambda entries: format_log(entries, verbose=verbose),
    )


def diff(
    path: str | None = typer.Argument(None, help="File or directory path"),
    revision: str | None = typer.Option(None, "--revision", "-r", help='Revision range, e.g. "1000:1005"'),
    change: int | None = typer.Option(None, "--change", "-c", help="Show changes made in one revision"),
) -> None:
    """Show a unified diff."""
    ctx = build_context()
    _run(
        ctx,
        ctx.client.diff(path, revision=revision, change=change),
        lambda output: format_diff(output, revision=revision, change=change),
    )


def blame(
    path: str = typer.Argument(..., help="File path or URL"),
    revision: str | None = typer.Option(None, "--revision", "-r", help="Annotate up to this revision"),
    start_line: int | None = typer.Option(None, "--start", min=1, help="First line to show"),
    end_line: int | None = typer.Option(None, "--end", min=1, help="Last line to show"),
) -> None:
    """Show per-line revision and author."""
    ctx = build_context()
    _run(
        ctx,
        ctx.client.blame(path, revision=revision, start_line=start_line, end_line=end_line),
        lambda lines: format_blame(lines, path, start_line=start_line, end_line=end_line),
    )


def cat(
    path: str = typer.Argument(..., help="File path or URL"),
    revision: str | None = typer.Option(None, "--revision", "-r", help="Revision to show"),
    start_line: int | None = typer.Option(None, "--start", min=1, help="First line to show"),
    end_line: int | None = typer.Option(None, "--end", min=1, help="Last line to show"),
) -> None:
    """Show file contents."""
    ctx = build_context()
    _run(
        ctx,
        ctx.client.cat(path, revision=revision),
        lambda content: format_cat(
            content, path, revision=revision, start_line=start_line, end_line=end_line
        ),
    )
