"""Plain-text rendering of svn records.

Shared by the MCP tools and the CLI. Pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from svnmcp.svn.models import BlameLine, InfoRecord, LogEntry, StatusEntry

__all__ = [
    "STATUS_LABELS",
    "format_blame",
    "format_cat",
    "format_date",
    "format_diff",
    "format_info",
    "format_log",
    "format_status",
    "status_label",
]

STATUS_LABELS: dict[str, str] = {
    "M": "Modified",
    "A": "Added",
    "D": "Deleted",
    "C": "Conflicted",
    "?": "Unversioned",
    "!": "Missing",
    "R": "Replaced",
    "X": "External",
    "I": "Ignored",
    "~": "Obstructed",
    "G": "Merged",
}

_STATUS_ORDER = ("Modified", "Added", "Deleted", "Conflicted", "Missing", "Unversioned", "Other")

_LOG_RULE = "─" * 60


def status_label(code: str) -> str:
    return STATUS_LABELS.get(code, "Other")


def format_date(iso_date: str) -> str:
    """Render an svn ISO-8601 timestamp as e.g. "Jan 5, 2024, 03:04 PM" (UTC).

    Unparseable input is returned unchanged.
    """
    try:
        dt = datetime.fromisoformat(iso_date.replace("Z", "+00:00"))
    except ValueError:
        return iso_date
    return f"{dt:%b} {dt.day}, {dt:%Y}, {dt:%I:%M %p}"


def format_info(info: InfoRecord) -> str:
    lines = [
        f"Path: {info.path}",
        f"URL: {info.url}",
        f"Relative URL: {info.relative_url}",
        f"Repository Root: {info.repository_root}",
        f"Repository UUID: {info.repository_uuid}",
        f"Revision: {info.revision}",
        f"Node Kind: {info.node_kind}",
        f"Last Changed Author: {info.last_changed_author}",
        f"Last Changed Rev: {info.last_changed_rev}",
        f"Last Changed Date: {info.last_changed_date}",
    ]
    if info.wc_root:
        lines.append(f"Working Copy Root Path: {info.wc_root}")
    lines.append(f"Branch Type: {info.branch_type}")
    if info.branch_name:
        lines.append(f"Branch Name: {info.branch_name}")
    return "\n".join(lines)


def format_status(entries: Sequence[StatusEntry], *, show_unversioned: bool = True) -> str:
    """Group entries by status, in a fixed order.

    Labels outside the fixed order (Replaced, External, ...) are listed
    under "Other".
    """
    if not entries:
        return "No changes in working copy."
    if not show_unversioned:
        entries = [e for e in entries if not e.is_unversioned]
        if not entries:
            return "No changes in working copy (unversioned files hidden)."

    grouped: dict[str, list[str]] = {}
    for entry in entries:
        label = status_label(entry.status_code)
        if label not in _STATUS_ORDER:
            label = "Other"
        grouped.setdefault(label, []).append(entry.path)

    count = len(entries)
    lines = [f"Working copy status ({count} item{'' if count == 1 else 's'}):"]
    for label in _STATUS_ORDER:
        if label in grouped:
            lines.append(f"\n{label}:")
            lines.extend(f"  {path}" for path in grouped[label])
    return "\n".join(lines)


def format_log(entries: Sequence[LogEntry], *, verbose: bool = False) -> str:
    if not entries:
        return "No log entries found."

    lines: list[str] = []
    for entry in entries:
        lines.append(_LOG_RULE)
        lines.append(f"r{entry.revision} | {entry.author} | {format_date(entry.date)}")
        lines.append("")
        lines.append(entry.message.strip() or "(no message)")

        if verbose and entry.paths:
            lines.append("")
            lines.append("Changed paths:")
            for change in entry.paths:
                line = f"  {change.action} {change.path}"
                if change.copyfrom_path:
                    line += f" (from {change.copyfrom_path}:{change.copyfrom_rev})"
                lines.append(line)

        lines.append("")
    return "\n".join(lines)


def format_diff(output: str, *, revision: str | None = None, change: int | None = None) -> str:
    if not output.strip():
        return "No differences found."
    if change:
        header = f"Changes in revision {change}:"
    elif revision:
        header = f"Diff for revision range {revision}:"
    else:
        header = "Working copy changes (BASE vs working copy):"
    return f"{header}\n\n{output}"


def format_blame(
    lines: Sequence[BlameLine],
    path: str,
    *,
    start_line: int | None = None,
    end_line: int | None = None,
) -> str:
    """Render blame lines as aligned ``rev author line: content`` rows."""
    if not lines:
        if start_line is not None or end_line is not None:
            return "No lines found in specified range."
        return "No blame output (file may be empty or binary)."

    out = [f"Blame for: {path}"]
    if start_line is not None or end_line is not None:
        start = start_line if start_line is not None else 1
        end = end_line if end_line is not None else lines[-1].line_number
        out.append(f"Lines {start} to {end}")
    out.append("")

    rev_width = max(len(str(line.revision)) for line in lines)
    author_width = max(len(line.author) for line in lines)
    number_width = max(len(str(line.line_number)) for line in lines)

    for line in lines:
        out.append(
            f"{line.revision:>{rev_width}} {line.author:<{author_width}} "
            f"{line.line_number:>{number_width}}: {line.content}"
        )
    return "\n".join(out)


def format_cat(
    content: str,
    path: str,
    *,
    revision: str | None = None,
    start_line: int | None = None,
    end_line: int | None = None,
) -> str:
    """Render file contents with line numbers, optionally a line range."""
    if not content:
        return "File is empty or binary."

    all_lines = content.split("\n")
    total = len(all_lines)
    start = start_line if start_line is not None else 1
    end = end_line if end_line is not None else total
    selected = all_lines[start - 1 : end] if start >= 1 else all_lines[:end]

    header = [f"File: {path}"]
    if revision:
        header.append(f"Revision: {revision}")
    if start_line is not None or end_line is not None:
        header.append(f"Lines {start} to {min(end, total)} of {total}")

    width = len(str(start + len(selected) - 1))
    body = [f"{start + i:>{width}}: {line}" for i, line in enumerate(selected)]
    return "\n".join(header) + "\n" + "\n".join(body)
