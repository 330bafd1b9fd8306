"""Error presentation utilities.

Centralized error formatting and exit code mapping, shared by the MCP
tools and the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from svnmcp.core.errors import ErrorKind, ExitCode, ParseError, SvnError
from svnmcp.output.console import Style

if TYPE_CHECKING:
    from svnmcp.output.console import ConsoleProtocol

__all__ = ["PARSE_ERROR_CODE", "error_code", "error_exit_code", "format_error", "print_error"]

PARSE_ERROR_CODE = "PARSE_ERROR"


def error_code(error: SvnError | ParseError) -> str:
    match error:
        case SvnError(kind=kind):
            return str(kind)
        case ParseError():
            return PARSE_ERROR_CODE


def format_error(error: SvnError | ParseError) -> str:
    """Render an error as the text block returned to MCP clients.

    Error: <message>
    Code: <code>
    Details: <details>      (only when present)
    """
    lines = [f"Error: {error.message}", f"Code: {error_code(error)}"]
    if error.details:
        lines.append(f"Details: {error.details}")
    return "\n".join(lines)


def print_error(error: SvnError | ParseError, console: ConsoleProtocol) -> None:
    """Print an error to console with appropriate formatting."""
    console.error(f"{error.message} ({error_code(error)})")
    if error.details:
        console.print(error.details, Style.DIM)
    match error:
        case SvnError(kind=ErrorKind.NOT_INSTALLED):
            console.print("hint: install Subversion and make sure `svn` is on PATH", Style.DIM)
        case SvnError(kind=ErrorKind.AUTH_FAILED):
            console.print("hint: check SVN_USERNAME and SVN_PASSWORD", Style.DIM)
        case SvnError(kind=ErrorKind.NOT_WORKING_COPY):
            console.print("hint: run inside a working copy or set SVN_LOCAL_WORKING_COPY", Style.DIM)
        case _:
            pass


def error_exit_code(error: SvnError | ParseError) -> int:
    """Get exit code for an error."""
    match error:
        case ParseError():
            return int(ExitCode.COMMAND_ERROR)
        case SvnError(kind=ErrorKind.FILE_NOT_FOUND | ErrorKind.INVALID_REVISION):
            return int(ExitCode.USER_ERROR)
        case SvnError(kind=ErrorKind.NOT_INSTALLED | ErrorKind.NOT_WORKING_COPY):
            return int(ExitCode.ENV_ERROR)
        case SvnError(kind=ErrorKind.AUTH_FAILED | ErrorKind.NETWORK_ERROR | ErrorKind.TIMEOUT):
            return int(ExitCode.NETWORK_ERROR)
        case SvnError(kind=ErrorKind.COMMAND_FAILED):
            return int(ExitCode.COMMAND_ERROR)
    return int(ExitCode.COMMAND_ERROR)
