"""Tests for svnmcp.output.console module."""

from __future__ import annotations

import pytest

from svnmcp.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    """Test Style enum."""

    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DEFAULT) == "default"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "HEADER"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_text_is_verbatim(self) -> None:
        console = MockConsole()
        console.text("[bold]not markup[/bold]\n  indented")
        assert console.messages == ["[bold]not markup[/bold]\n  indented"]

    def test_error_and_warning(self) -> None:
        console = MockConsole()
        console.error("svn failed")
        console.warning("slow server")
        assert console.has_error() is True
        assert console.has_warning() is True
        assert console.messages == ["error: svn failed", "warning: slow server"]

    def test_find(self) -> None:
        console = MockConsole()
        console.header("svn")
        console.success("svn: 1.14.3")
        assert len(console.find("1.14")) == 1
        assert console.find("missing") == []

    def test_text_output(self) -> None:
        console = MockConsole()
        console.print("a")
        console.print("b")
        assert console.text_output == "a\nb"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x")


class TestRichConsole:
    def test_text_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.text("Index: [a].c\n+[red]x[/red]")
        out = capsys.readouterr().out
        assert "[red]x[/red]" in out
        assert "Index: [a].c" in out

    def test_error_escapes_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("bad [path]")
        assert "bad [path]" in capsys.readouterr().out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole(stderr=True)
        console.print("to stderr")
        captured = capsys.readouterr()
        assert "to stderr" in captured.err
        assert "to stderr" not in captured.out
