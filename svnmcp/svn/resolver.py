"""Resolve a user-supplied path or URL into an svn invocation target.

Resolution order (first match wins, the order is fixed):
1. Repository URL: used as-is, with credentials
2. Path inside a local working copy (a `.svn` directory in it or a parent):
   local, without credentials, run from the working-copy root
3. Path present in the configured local mirror (SVN_LOCAL_WORKING_COPY)
4. Path appended to the configured remote (SVN_TRUNK_PATH / SVN_REPO_URL),
   with credentials
5. The absolute local path, without credentials; svn then reports
   "not a working copy", which is the intended signal

Resolution never fails and only probes the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from svnmcp.core.config import SvnConfig
from svnmcp.svn.models import Operation, RepositoryLocation

__all__ = [
    "REMOTE_SCHEMES",
    "WC_MARKER",
    "PathResolver",
    "find_working_copy_root",
    "is_url",
    "is_working_copy",
    "remote_url",
]

REMOTE_SCHEMES = ("svn://", "svn+ssh://", "http://", "https://")

WC_MARKER = ".svn"


def is_url(path: str) -> bool:
    """Check if path is a repository URL rather than a local path."""
    return path.startswith(REMOTE_SCHEMES)


def is_working_copy(path: Path) -> bool:
    """Check if a directory holds working-copy metadata."""
    return (path / WC_MARKER).exists()


def find_working_copy_root(start: Path) -> Path | None:
    """Search upward from start for a working-copy root.

    The filesystem root is tested once; ``Path.parents`` stops there.
    """
    for parent in (start, *start.parents):
        if is_working_copy(parent):
            return parent
    return None


def _relative_part(path: str | None) -> str:
    """Turn user input into a URL-safe relative path fragment."""
    if not path:
        return ""
    rel = path.replace("\\", "/")
    while rel.startswith("./"):
        rel = rel[2:]
    rel = rel.strip("/")
    return "" if rel == "." else rel


def remote_url(config: SvnConfig, relative: str = "") -> str | None:
    """Build a remote URL from the configured repository location.

    A trunk path that is itself a URL is used directly; otherwise it is
    joined below the repository URL. Returns None if no remote is set.
    """
    trunk = config.trunk_path
    if trunk and is_url(trunk):
        parts = [trunk.rstrip("/")]
    elif config.repo_url:
        parts = [config.repo_url.rstrip("/")]
        if trunk and trunk.strip("/"):
            parts.append(trunk.strip("/"))
    else:
        return None

    if relative:
        parts.append(relative)
    return "/".join(parts)


class PathResolver:
    """Decide where and how an svn command runs.

    Attributes:
        config: Connection settings
        cwd: Base for relative paths (the process cwd if None)
    """

    def __init__(self, config: SvnConfig, cwd: Path | None = None) -> None:
        self.config = config
        self.cwd = cwd

    def absolute(self, path: str | None) -> Path:
        """Absolute, normalized form of a local path (cwd if empty)."""
        base = self.cwd or Path.cwd()
        if not path:
            return Path(os.path.normpath(base))
        p = Path(path).expanduser()
        if not p.is_absolute():
            p = base / p
        return Path(os.path.normpath(p))

    def resolve(self, path: str | None, operation: Operation) -> RepositoryLocation:
        """Resolve a path or URL for an operation.

        Args:
            path: Local path, repository URL, or None for the current directory
            operation: The svn operation the location is for

        Returns:
            A best-effort RepositoryLocation (never fails)
        """
        if path and is_url(path):
            logger.debug(f"{operation}: '{path}' is a repository URL")
            return RepositoryLocation(target=path, use_credentials=True)

        absolute = self.absolute(path)

        wc_root = find_working_copy_root(absolute)
        if wc_root is not None:
            logger.debug(f"{operation}: '{absolute}' is inside working copy {wc_root}")
            return RepositoryLocation(target=str(absolute), working_dir=wc_root)

        relative = _relative_part(path)

        mirror = self.config.local_working_copy
        if mirror is not None:
            candidate = mirror / relative if relative else mirror
            if candidate.exists():
                logger.debug(f"{operation}: using local mirror path {candidate}")
                return RepositoryLocation(target=str(candidate), working_dir=mirror)

        remote = remote_url(self.config, relative)
        if remote is not None:
            logger.debug(f"{operation}: falling back to remote {remote}")
            return RepositoryLocation(target=remote, use_credentials=True)

        logger.debug(f"{operation}: no working copy or remote for '{absolute}'")
        return RepositoryLocation(target=str(absolute))

    def default_location(self) -> RepositoryLocation:
        """Target used when an operation is called without a path.

        Local mirror first, then the configured remote, then the current
        directory.
        """
        mirror = self.config.local_working_copy
        if mirror is not None:
            return RepositoryLocation(target=str(mirror), working_dir=mirror)

        remote = remote_url(self.config)
        if remote is not None:
            return RepositoryLocation(target=remote, use_credentials=True)

        return RepositoryLocation(target=str(self.absolute(None)))
