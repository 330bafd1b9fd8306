from __future__ import annotations

from dataclasses import dataclass

import typer

from svnmcp.core.config import SvnConfig, load_config
from svnmcp.core.errors import ExitCode
from svnmcp.core.logging import setup_logging
from svnmcp.core.result import Err
from svnmcp.output.console import ConsoleProtocol, RichConsole
from svnmcp.svn.client import SvnClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: SvnConfig
    client: SvnClient
    console: ConsoleProtocol


def build_context(*, console: ConsoleProtocol | None = None) -> CLIContext:
    config_result = load_config()
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ExitCode.ENV_ERROR))

    config = config_result.value
    setup_logging(config.log_level)

    return CLIContext(
        config=config,
        client=SvnClient(config),
        console=console or RichConsole(),
    )
