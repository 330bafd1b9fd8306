"""Read-only svn operations.

``SvnClient`` ties the three layers together for each operation: the
resolver picks the target, the executor runs svn, a parser builds the
records. Every method returns a Result and never raises for svn or parse
failures.

Usage:
    client = SvnClient(config)

    match await client.log("src", limit=5, verbose=True):
        case Ok(entries):
            for entry in entries:
                print(f"r{entry.revision} {entry.author}")
        case Err(e):
            print(f"error: {e}")
"""

from __future__ import annotations

from loguru import logger

from svnmcp.core.config import SvnConfig
from svnmcp.core.errors import ErrorKind, ParseError, SvnError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.svn.executor import SvnExecutor
from svnmcp.svn.models import BlameLine, InfoRecord, LogEntry, RepositoryLocation, StatusEntry
from svnmcp.svn.parsers import parse_blame, parse_info_xml, parse_log_xml, parse_status_xml
from svnmcp.svn.resolver import PathResolver, find_working_copy_root, remote_url

__all__ = ["DEFAULT_LOG_LIMIT", "ClientError", "SvnClient"]

DEFAULT_LOG_LIMIT = 10

type ClientError = SvnError | ParseError


class SvnClient:
    """Read-only svn operations for one configuration.

    Attributes:
        config: Connection settings
        resolver: Path/URL resolution
        executor: svn invocation
    """

    def __init__(
        self,
        config: SvnConfig,
        *,
        resolver: PathResolver | None = None,
        executor: SvnExecutor | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or PathResolver(config)
        self.executor = executor or SvnExecutor(config)

    async def _run(self, command: str, args: list[str], location: RepositoryLocation) -> Result[str, SvnError]:
        return await self.executor.execute(
            command,
            [*args, location.target],
            use_credentials=location.use_credentials,
            working_dir=location.working_dir,
        )

    # -------------------------------------------------------------------------
    # info
    # -------------------------------------------------------------------------

    async def info(self, path: str | None = None) -> Result[InfoRecord, ClientError]:
        """Repository and working-copy information.

        Without a path, tries the local mirror, then the current directory,
        then the configured remote.
        """
        if path:
            location = self.resolver.resolve(path, "info")
            return (await self._run("info", ["--xml"], location)).and_then(parse_info_xml)

        candidates: list[RepositoryLocation] = []
        mirror = self.config.local_working_copy
        if mirror is not None:
            candidates.append(RepositoryLocation(target=str(mirror), working_dir=mirror))

        cwd = self.resolver.absolute(None)
        candidates.append(RepositoryLocation(target=str(cwd), working_dir=find_working_copy_root(cwd)))

        for location in candidates:
            result = await self._run("info", ["--xml"], location)
            match result:
                case Ok(xml):
                    return parse_info_xml(xml)
                case Err(e) if e.kind is ErrorKind.NOT_INSTALLED:
                    return Err(e)
                case Err(e):
                    logger.debug(f"info: {location.target} unusable ({e.kind}), trying next")

        remote = remote_url(self.config)
        if remote is not None:
            location = RepositoryLocation(target=remote, use_credentials=True)
            return (await self._run("info", ["--xml"], location)).and_then(parse_info_xml)

        return Err(
            SvnError(
                ErrorKind.NOT_WORKING_COPY,
                "No SVN working copy found and no repository URL configured",
            )
        )

    # -------------------------------------------------------------------------
    # status
    # -------------------------------------------------------------------------

    async def status(
        self,
        path: str | None = None,
        *,
        show_unversioned: bool = True,
    ) -> Result[list[StatusEntry], ClientError]:
        """Working-copy status. Only valid inside a working copy."""
        target = self.resolver.absolute(path)
        wc_root = find_working_copy_root(target)
        if wc_root is None:
            return Err(
                SvnError(
                    ErrorKind.NOT_WORKING_COPY,
                    "The specified path is not within an SVN working copy",
                    details=str(target),
                )
            )

        location = RepositoryLocation(target=str(target), working_dir=wc_root)
        result = (await self._run("status", ["--xml"], location)).and_then(parse_status_xml)
        if isinstance(result, Ok) and not show_unversioned:
            return Ok([e for e in result.value if not e.is_unversioned])
        return result

    # -------------------------------------------------------------------------
    # log
    # -------------------------------------------------------------------------

    async def log(
        self,
        path: str | None = None,
        *,
        limit: int = DEFAULT_LOG_LIMIT,
        revision: str | None = None,
        verbose: bool = False,
        search: str | None = None,
    ) -> Result[list[LogEntry], ClientError]:
        """Commit history, newest first unless a revision range says otherwise."""
        location = self.resolver.resolve(path, "log") if path else self.resolver.default_location()

        args = ["--xml", "-l", str(limit)]
        if verbose:
            args.append("-v")
        if revision:
            args += ["-r", revision]
        if search:
            args += ["--search", search]

        return (await self._run("log", args, location)).and_then(parse_log_xml)

    # -------------------------------------------------------------------------
    # diff
    # -------------------------------------------------------------------------

    async def diff(
        self,
        path: str | None = None,
        *,
        revision: str | None = None,
        change: int | None = None,
    ) -> Result[str, ClientError]:
        """Unified diff of local changes, a revision range, or one change.

        Anything other than a plain BASE comparison needs the repository,
        so credentials are attached in that case.
        """
        if path:
            location = self.resolver.resolve(path, "diff")
        else:
            cwd = self.resolver.absolute(None)
            location = RepositoryLocation(target=str(cwd), working_dir=find_working_copy_root(cwd))

        args: list[str] = []
        use_credentials = location.use_credentials
        if change:
            args += ["-c", str(change)]
            use_credentials = True
        elif revision:
            args += ["-r", revision]
            if revision != "BASE":
                use_credentials = True

        location = RepositoryLocation(
            target=location.target,
            use_credentials=use_credentials,
            working_dir=location.working_dir,
        )
        return await self._run("diff", args, location)

    # -------------------------------------------------------------------------
    # blame / cat
    # -------------------------------------------------------------------------

    async def blame(
        self,
        path: str,
        *,
        revision: str | None = None,
        start_line: int | None = None,
        end_line: int | None = None,
    ) -> Result[list[BlameLine], ClientError]:
        """Per-line revision and author, optionally limited to a line range."""
        if not path:
            return Err(SvnError(ErrorKind.FILE_NOT_FOUND, "Path is required for blame operation"))

        location = self.resolver.resolve(path, "blame")
        args = ["-r", revision] if revision else []
        result = await self._run("blame", args, location)
        if isinstance(result, Err):
            return result

        lines = parse_blame(result.value)
        if start_line is None and end_line is None:
            return Ok(lines)
        start = start_line if start_line is not None else 1
        end = end_line if end_line is not None else len(lines)
        return Ok([line for line in lines if start <= line.line_number <= end])

    async def cat(self, path: str, *, revision: str | None = None) -> Result[str, ClientError]:
        """File contents, at a revision if given."""
        if not path:
            return Err(SvnError(ErrorKind.FILE_NOT_FOUND, "Path is required for cat operation"))

        location = self.resolver.resolve(path, "cat")
        args = ["-r", revision] if revision else []
        return await self._run("cat", args, location)
