"""Tests for svnmcp.output.errors module."""

from __future__ import annotations

import pytest

from svnmcp.core.errors import ErrorKind, ExitCode, ParseError, SvnError
from svnmcp.output.console import MockConsole, Style
from svnmcp.output.errors import error_exit_code, format_error, print_error


class TestFormatError:
    def test_with_details(self) -> None:
        error = SvnError(
            ErrorKind.NOT_WORKING_COPY,
            "The specified path is not an SVN working copy",
            details="svn: E155007: '/tmp' is not a working copy",
        )
        assert format_error(error) == (
            "Error: The specified path is not an SVN working copy\n"
            "Code: NOT_WORKING_COPY\n"
            "Details: svn: E155007: '/tmp' is not a working copy"
        )

    def test_without_details(self) -> None:
        error = SvnError(ErrorKind.FILE_NOT_FOUND, "Path is required for blame operation")
        assert format_error(error) == "Error: Path is required for blame operation\nCode: FILE_NOT_FOUND"

    def test_parse_error(self) -> None:
        assert format_error(ParseError("Invalid SVN XML output")) == (
            "Error: Invalid SVN XML output\nCode: PARSE_ERROR"
        )


class TestErrorExitCode:
    @pytest.mark.parametrize(
        ("kind", "code"),
        [
            (ErrorKind.FILE_NOT_FOUND, ExitCode.USER_ERROR),
            (ErrorKind.INVALID_REVISION, ExitCode.USER_ERROR),
            (ErrorKind.NOT_INSTALLED, ExitCode.ENV_ERROR),
            (ErrorKind.NOT_WORKING_COPY, ExitCode.ENV_ERROR),
            (ErrorKind.AUTH_FAILED, ExitCode.NETWORK_ERROR),
            (ErrorKind.NETWORK_ERROR, ExitCode.NETWORK_ERROR),
            (ErrorKind.TIMEOUT, ExitCode.NETWORK_ERROR),
            (ErrorKind.COMMAND_FAILED, ExitCode.COMMAND_ERROR),
        ],
    )
    def test_kinds(self, kind: ErrorKind, code: ExitCode) -> None:
        assert error_exit_code(SvnError(kind, "x")) == int(code)

    def test_parse_error(self) -> None:
        assert error_exit_code(ParseError("x")) == int(ExitCode.COMMAND_ERROR)


class TestPrintError:
    def test_message_and_details(self) -> None:
        console = MockConsole()
        print_error(SvnError(ErrorKind.COMMAND_FAILED, "failed", details="E205000"), console)

        assert console.messages[0] == "error: failed (COMMAND_FAILED)"
        assert console.find("E205000")[0].style == Style.DIM

    def test_hint_for_missing_binary(self) -> None:
        console = MockConsole()
        print_error(SvnError(ErrorKind.NOT_INSTALLED, "svn missing"), console)

        assert console.find("hint:")
