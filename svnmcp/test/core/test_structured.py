"""Tests for svnmcp.core.structured module."""

from __future__ import annotations

from svnmcp.core.structured import (
    as_sequence,
    as_str_dict,
    get_int,
    get_str,
    get_table,
    get_text,
    is_str_dict,
)


class TestAsSequence:
    """Zero, one and many occurrences take the same shape."""

    def test_absent(self) -> None:
        assert as_sequence(None) == []

    def test_single(self) -> None:
        entry = {"@path": "a.txt"}
        assert as_sequence(entry) == [entry]

    def test_many(self) -> None:
        entries = [{"@path": "a.txt"}, {"@path": "b.txt"}]
        assert as_sequence(entries) == entries

    def test_many_returns_copy(self) -> None:
        entries: list[object] = [1, 2]
        seq = as_sequence(entries)
        seq.append(3)
        assert entries == [1, 2]

    def test_scalar(self) -> None:
        assert as_sequence("/trunk/a.c") == ["/trunk/a.c"]


class TestDicts:
    def test_is_str_dict(self) -> None:
        assert is_str_dict({"a": 1}) is True
        assert is_str_dict({1: "a"}) is False
        assert is_str_dict([("a", 1)]) is False

    def test_as_str_dict(self) -> None:
        assert as_str_dict({"a": 1}) == {"a": 1}
        assert as_str_dict("a") is None

    def test_get_table(self) -> None:
        assert get_table({"commit": {"author": "bob"}}, "commit") == {"author": "bob"}
        assert get_table({"commit": "bob"}, "commit") is None
        assert get_table({}, "commit") is None


class TestLeaves:
    def test_get_text(self) -> None:
        assert get_text("bob") == "bob"
        assert get_text(42) == "42"
        assert get_text({"@action": "M", "#text": "/trunk/a.c"}) == "/trunk/a.c"
        assert get_text({"@action": "M"}) is None
        assert get_text(True) is None
        assert get_text(None) is None

    def test_get_str(self) -> None:
        table = {"author": "bob", "@path": 123}
        assert get_str(table, "author") == "bob"
        assert get_str(table, "@path") == "123"
        assert get_str(table, "missing") == ""
        assert get_str(table, "missing", "n/a") == "n/a"
        assert get_str(None, "author") == ""

    def test_get_int(self) -> None:
        table = {"@revision": 1234, "rev": "56", "bad": "r7", "flag": True, "super": "\u00b2"}
        assert get_int(table, "@revision") == 1234
        assert get_int(table, "rev") == 56
        assert get_int(table, "bad") is None
        assert get_int(table, "flag") is None
        assert get_int(table, "super") is None
        assert get_int(table, "missing") is None
        assert get_int(None, "@revision") is None
