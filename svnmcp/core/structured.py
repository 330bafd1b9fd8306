"""Helpers for safely working with dynamic (untyped) structures.

Parsed ``svn --xml`` output is first turned into plain dicts and lists
(see ``svnmcp.svn.xml``). These helpers read that tree with runtime
validation and static type narrowing.

The most important one is ``as_sequence``: the tree stores an element that
occurs once as a bare value and an element that occurs several times as a
list. Every reader of a repeated element must go through ``as_sequence`` so
that zero, one and many occurrences take the same code path.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]

__all__ = [
    "ObjList",
    "StrDict",
    "as_sequence",
    "as_str_dict",
    "get_int",
    "get_str",
    "get_table",
    "get_text",
    "is_str_dict",
]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def as_sequence(node: object) -> ObjList:
    """Normalize a possibly-repeated node to a list.

    ``None`` becomes ``[]``, a list is returned as a new list, any other
    value (a single element) becomes a one-element list.
    """
    if node is None:
        return []
    if isinstance(node, list):
        return list(cast(ObjList, node))
    return [node]


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def get_text(node: object) -> str | None:
    """Return the text content of a leaf node.

    A leaf is either a bare scalar or a table holding ``#text``.
    """
    if isinstance(node, bool):
        return None
    if isinstance(node, str):
        return node
    if isinstance(node, int):
        return str(node)
    d = as_str_dict(node)
    if d is not None:
        return get_text(d.get("#text"))
    return None


def get_str(table: Mapping[str, object] | None, key: str, default: str = "") -> str:
    """Get the text of ``key`` from a mapping, or ``default``."""
    if table is None:
        return default
    text = get_text(table.get(key))
    return default if text is None else text


def get_int(table: Mapping[str, object] | None, key: str) -> int | None:
    """Get an integer value from a mapping.

    Accepts ints and decimal strings. Returns None if missing or invalid.
    """
    if table is None:
        return None
    value = table.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = get_text(value)
    if text is None:
        return None
    text = text.strip()
    if text.isascii() and text.isdigit():
        return int(text)
    return None
