from __future__ import annotations

import typer

from svnmcp import __version__
from svnmcp.cli.commands.check import check
from svnmcp.cli.commands.query import blame, cat, diff, info, log, status
from svnmcp.cli.commands.serve import serve


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(serve)
app.command()(check)
app.command()(info)
app.command()(status)
app.command()(log)
app.command()(diff)
app.command()(blame)
app.command()(cat)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
