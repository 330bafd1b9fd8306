"""Parsers for svn output.

- ``parse_info_xml`` / ``parse_status_xml`` / ``parse_log_xml`` read the
  ``--xml`` output of the matching subcommand
- ``parse_blame`` reads the plain-text output of ``svn blame``
- ``classify_branch`` infers trunk/branch/tag from a repository URL

All functions are pure. XML parsers return ``Err(ParseError)`` for
documents that are not well-formed or lack their root element; missing
optional fields default to "" or 0.
"""

from __future__ import annotations

import re

from svnmcp.core.errors import ParseError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.core.structured import (
    StrDict,
    as_sequence,
    as_str_dict,
    get_int,
    get_str,
    get_table,
    get_text,
)
from svnmcp.svn.models import (
    BlameLine,
    BranchInfo,
    BranchType,
    CommitSummary,
    InfoRecord,
    LogEntry,
    LogPathChange,
    StatusEntry,
)
from svnmcp.svn.xml import parse_document

__all__ = [
    "STATUS_CODES",
    "classify_branch",
    "parse_blame",
    "parse_info_xml",
    "parse_log_xml",
    "parse_status_xml",
    "status_code",
]

# wc-status item -> one-letter code shown by `svn status`
STATUS_CODES: dict[str, str] = {
    "added": "A",
    "conflicted": "C",
    "deleted": "D",
    "ignored": "I",
    "modified": "M",
    "replaced": "R",
    "external": "X",
    "unversioned": "?",
    "missing": "!",
    "obstructed": "~",
    "normal": " ",
    "incomplete": "!",
    "merged": "G",
}

# Author tokens cannot contain whitespace; an author with embedded spaces
# shifts the rest of the name into the content.
_BLAME_LINE = re.compile(r"^\s*(\d+)\s+(\S+)\s(.*)$")

_TAG = re.compile(r"/tags/([^/]+)/?$", re.IGNORECASE)
_BRANCH_PATTERNS = (
    re.compile(r"/branches/([^/]+/dev/[^/]+)/?$", re.IGNORECASE),
    re.compile(r"/branches/([^/]+/trunk)/?$", re.IGNORECASE),
    re.compile(r"/branches/([^/]+)/?$", re.IGNORECASE),
)


def status_code(item: str) -> str:
    """Map a wc-status item to its one-character code."""
    code = STATUS_CODES.get(item)
    if code is not None:
        return code
    return item[:1].upper() or " "


def classify_branch(url: str) -> BranchInfo:
    """Infer the branch role of a repository URL.

    Checked in order, first match wins:
    .../trunk (or .../trunk/...)          -> trunk
    .../tags/<name>                       -> tag
    .../branches/<name>/dev/<ticket>      -> branch "<name>/dev/<ticket>"
    .../branches/<name>/trunk             -> branch "<name>/trunk"
    .../branches/<name>                   -> branch "<name>"
    """
    lower = url.lower()
    if lower.endswith("/trunk") or "/trunk/" in lower:
        return BranchInfo(BranchType.TRUNK, "trunk")

    match = _TAG.search(url)
    if match:
        return BranchInfo(BranchType.TAG, match.group(1))

    for pattern in _BRANCH_PATTERNS:
        match = pattern.search(url)
        if match:
            return BranchInfo(BranchType.BRANCH, match.group(1))

    return BranchInfo()


def _root(xml: str, tag: str) -> Result[object, ParseError]:
    """Parse a document and return the content of its expected root."""
    result = parse_document(xml)
    if isinstance(result, Err):
        return result
    if tag not in result.value:
        return Err(ParseError(f"Invalid SVN {tag} XML output: missing <{tag}>"))
    return Ok(result.value[tag])


def parse_info_xml(xml: str) -> Result[InfoRecord, ParseError]:
    """Parse ``svn info --xml``. Only the first entry is used."""
    root = _root(xml, "info")
    if isinstance(root, Err):
        return root

    info = as_str_dict(root.value) or {}
    entries = [e for e in map(as_str_dict, as_sequence(info.get("entry"))) if e is not None]
    if not entries:
        return Err(ParseError("Invalid SVN info XML output: no <entry>"))
    entry = entries[0]

    url = get_str(entry, "url")
    repository = get_table(entry, "repository")
    commit = get_table(entry, "commit")
    wc_info = get_table(entry, "wc-info")
    wc_root = get_str(wc_info, "wcroot-abspath") if wc_info is not None else ""

    return Ok(
        InfoRecord(
            path=get_str(entry, "@path"),
            url=url,
            relative_url=get_str(entry, "relative-url"),
            repository_root=get_str(repository, "root"),
            repository_uuid=get_str(repository, "uuid"),
            revision=get_int(entry, "@revision") or 0,
            node_kind=get_str(entry, "@kind"),
            last_changed_author=get_str(commit, "author"),
            last_changed_rev=get_int(commit, "@revision") or 0,
            last_changed_date=get_str(commit, "date"),
            wc_root=wc_root or None,
            branch=classify_branch(url),
        )
    )


def _status_entry(entry: StrDict) -> StatusEntry:
    wc_status = get_table(entry, "wc-status")
    item = get_str(wc_status, "@item") or "normal"
    commit = get_table(wc_status, "commit") if wc_status is not None else None

    return StatusEntry(
        path=get_str(entry, "@path"),
        status=item,
        status_code=status_code(item),
        props=get_str(wc_status, "@props") or "none",
        revision=get_int(wc_status, "@revision"),
        commit=CommitSummary(
            revision=get_int(commit, "@revision") or 0,
            author=get_str(commit, "author"),
            date=get_str(commit, "date"),
        )
        if commit is not None
        else None,
    )


def parse_status_xml(xml: str) -> Result[list[StatusEntry], ParseError]:
    """Parse ``svn status --xml``.

    Entries of every ``<target>`` and ``<changelist>`` are returned in
    document order; a target without entries yields an empty list.
    """
    root = _root(xml, "status")
    if isinstance(root, Err):
        return root
    status = as_str_dict(root.value)
    if status is None:
        return Ok([])

    entries: list[StatusEntry] = []
    for group in ("target", "changelist"):
        for node in as_sequence(status.get(group)):
            container = as_str_dict(node)
            if container is None:
                continue
            for raw in as_sequence(container.get("entry")):
                entry = as_str_dict(raw)
                if entry is not None:
                    entries.append(_status_entry(entry))
    return Ok(entries)


def _path_change(node: object) -> LogPathChange | None:
    if isinstance(node, str):
        return LogPathChange(action="M", kind="file", path=node)
    p = as_str_dict(node)
    if p is None:
        return None
    copyfrom_path = get_str(p, "@copyfrom-path")
    return LogPathChange(
        action=get_str(p, "@action"),
        kind=get_str(p, "@kind"),
        path=get_text(p) or "",
        copyfrom_path=copyfrom_path or None,
        copyfrom_rev=get_int(p, "@copyfrom-rev"),
    )


def _log_entry(entry: StrDict) -> LogEntry:
    paths: tuple[LogPathChange, ...] | None = None
    paths_table = get_table(entry, "paths")
    if paths_table is not None:
        changes = [_path_change(n) for n in as_sequence(paths_table.get("path"))]
        paths = tuple(c for c in changes if c is not None) or None

    return LogEntry(
        revision=get_int(entry, "@revision") or 0,
        author=get_str(entry, "author"),
        date=get_str(entry, "date"),
        message=get_str(entry, "msg"),
        paths=paths,
    )


def parse_log_xml(xml: str) -> Result[list[LogEntry], ParseError]:
    """Parse ``svn log --xml`` (with or without ``-v``)."""
    root = _root(xml, "log")
    if isinstance(root, Err):
        return root
    log = as_str_dict(root.value)
    if log is None:
        return Ok([])

    entries: list[LogEntry] = []
    for raw in as_sequence(log.get("logentry")):
        entry = as_str_dict(raw)
        if entry is not None:
            entries.append(_log_entry(entry))
    return Ok(entries)


def parse_blame(output: str) -> list[BlameLine]:
    """Parse ``svn blame`` text output.

    Line numbers follow input order (1-based) whether or not a line
    matches ``<revision> <author> <content>``. Lines that do not match are
    kept with revision 0 and an empty author. A final newline does not
    produce an extra line.
    """
    if not output:
        return []

    lines = output.split("\n")
    if lines[-1] == "":
        lines.pop()

    result: list[BlameLine] = []
    for number, raw in enumerate(lines, start=1):
        line = raw[:-1] if raw.endswith("\r") else raw
        match = _BLAME_LINE.match(line)
        if match:
            result.append(
                BlameLine(
                    line_number=number,
                    revision=int(match.group(1)),
                    author=match.group(2),
                    content=match.group(3),
                )
            )
        else:
            result.append(BlameLine(line_number=number, revision=0, author="", content=line))
    return result
