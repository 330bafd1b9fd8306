"""Output formatting and console abstraction."""

from svnmcp.output.console import ConsoleProtocol, MockConsole, OutputRecord, RichConsole, Style
from svnmcp.output.errors import error_exit_code, format_error, print_error
from svnmcp.output.format import (
    format_blame,
    format_cat,
    format_date,
    format_diff,
    format_info,
    format_log,
    format_status,
)

__all__ = [
    # console
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
    # errors
    "error_exit_code",
    "format_error",
    "print_error",
    # format
    "format_blame",
    "format_cat",
    "format_date",
    "format_diff",
    "format_info",
    "format_log",
    "format_status",
]
