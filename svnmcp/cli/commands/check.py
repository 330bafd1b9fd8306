from __future__ import annotations

import asyncio

import typer

from svnmcp.cli.context import CLIContext, build_context
from svnmcp.core.errors import ExitCode
from svnmcp.core.result import Err, Ok
from svnmcp.output.console import Style
from svnmcp.svn.resolver import find_working_copy_root, remote_url


def check() -> None:
    """Check the svn binary and configuration."""
    ctx = build_context()
    ok = asyncio.run(_check_svn(ctx))
    _print_config(ctx)
    if not ok:
        raise typer.Exit(code=int(ExitCode.ENV_ERROR))


async def _check_svn(ctx: CLIContext) -> bool:
    console = ctx.console
    console.header("svn")
    match await ctx.client.executor.version():
        case Ok(version):
            console.print(f"svn: {version}", Style.SUCCESS)
            return True
        case Err(e):
            console.print(f"svn: {e.message}", Style.ERROR)
            console.print("hint: install Subversion and make sure `svn` is on PATH", Style.DIM)
            return False


def _print_config(ctx: CLIContext) -> None:
    console = ctx.console
    config = ctx.config
    console.header("Configuration")

    if config.has_credentials:
        console.print(f"credentials: {config.username}", Style.SUCCESS)
    else:
        console.print("credentials: none (anonymous access)", Style.DIM)

    remote = remote_url(config)
    if remote is not None:
        console.print(f"remote: {remote}", Style.SUCCESS)
    else:
        console.print("remote: not configured", Style.DIM)

    mirror = config.local_working_copy
    if mirror is None:
        console.print("local working copy: not configured", Style.DIM)
    elif find_working_copy_root(mirror) is None:
        console.print(f"local working copy: {mirror} (not a working copy)", Style.WARNING)
    else:
        console.print(f"local working copy: {mirror}", Style.SUCCESS)

    console.print(f"timeout: {config.timeout_ms} ms", Style.DIM)
    console.print(f"log level: {config.log_level}", Style.DIM)
