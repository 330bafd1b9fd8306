"""Structured records produced from svn output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Literal

__all__ = [
    "BlameLine",
    "BranchInfo",
    "BranchType",
    "CommitSummary",
    "InfoRecord",
    "LogEntry",
    "LogPathChange",
    "Operation",
    "RepositoryLocation",
    "StatusEntry",
]

Operation = Literal["info", "status", "log", "diff", "blame", "cat"]


@dataclass(frozen=True, slots=True)
class RepositoryLocation:
    """Where and how to run an svn command.

    Attributes:
        target: Local path or repository URL passed to svn
        use_credentials: Attach configured credentials to the invocation
        working_dir: Directory to run svn in (None for the current one)
    """

    target: str
    use_credentials: bool = False
    working_dir: Path | None = None

    def __post_init__(self) -> None:
        if not self.target:
            raise ValueError("RepositoryLocation.target must not be empty")


class BranchType(StrEnum):
    TRUNK = "trunk"
    BRANCH = "branch"
    TAG = "tag"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class BranchInfo:
    """Branch role inferred from a repository URL."""

    type: BranchType = BranchType.UNKNOWN
    name: str | None = None


@dataclass(frozen=True, slots=True)
class InfoRecord:
    """Parsed ``svn info --xml`` entry."""

    path: str
    url: str
    relative_url: str
    repository_root: str
    repository_uuid: str
    revision: int
    node_kind: str
    last_changed_author: str
    last_changed_rev: int
    last_changed_date: str
    wc_root: str | None = None
    branch: BranchInfo = BranchInfo()

    @property
    def branch_type(self) -> BranchType:
        return self.branch.type

    @property
    def branch_name(self) -> str | None:
        return self.branch.name


@dataclass(frozen=True, slots=True)
class CommitSummary:
    """Last commit of a status entry."""

    revision: int
    author: str
    date: str


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry of ``svn status --xml``.

    Attributes:
        path: Path as reported by svn
        status: Item status word (e.g. "modified", "unversioned")
        status_code: One-character code (e.g. "M", "?")
        props: Property status word (e.g. "none", "modified")
        revision: Working revision, if reported
        commit: Last commit summary, if reported
    """

    path: str
    status: str
    status_code: str
    props: str = "none"
    revision: int | None = None
    commit: CommitSummary | None = None

    @property
    def is_unversioned(self) -> bool:
        return self.status_code == "?"


@dataclass(frozen=True, slots=True)
class LogPathChange:
    """A changed path inside a verbose log entry."""

    action: str
    kind: str
    path: str
    copyfrom_path: str | None = None
    copyfrom_rev: int | None = None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single ``<logentry>``.

    ``paths`` is None when svn was not asked for changed paths, and keeps
    the server's ordering otherwise.
    """

    revision: int
    author: str
    date: str
    message: str
    paths: tuple[LogPathChange, ...] | None = None


@dataclass(frozen=True, slots=True)
class BlameLine:
    """One annotated line of ``svn blame``.

    Lines svn could not attribute (or that did not parse) carry revision 0
    and an empty author.
    """

    line_number: int
    revision: int
    author: str
    content: str
