"""Run the svn binary and classify its failures.

All operations return Result types. The executor is the only place where
an ``SvnError`` is created from a subprocess outcome.

Usage:
    executor = SvnExecutor(config)
    match await executor.execute("info", ["--xml", "https://svn.example.com/repo/trunk"],
                                 use_credentials=True):
        case Ok(xml):
            ...
        case Err(e):
            print(f"{e.kind}: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from svnmcp.core.config import SvnConfig
from svnmcp.core.errors import ErrorKind, SvnError
from svnmcp.core.result import Err, Ok, Result
from svnmcp.platform.process import FailureReason, ProcessError
from svnmcp.platform.process import run as run_process

__all__ = [
    "NON_INTERACTIVE",
    "PROBE_TIMEOUT_MS",
    "SvnExecutor",
    "build_args",
    "classify_failure",
]

NON_INTERACTIVE = "--non-interactive"

PROBE_TIMEOUT_MS = 5_000

_MASK = "******"

# (phrases, kind, message), checked in order against stderr + stdout.
_FAILURE_PATTERNS: tuple[tuple[tuple[str, ...], ErrorKind, str], ...] = (
    (
        ("is not a working copy",),
        ErrorKind.NOT_WORKING_COPY,
        "The specified path is not an SVN working copy",
    ),
    (
        ("authorization failed", "Authentication failed"),
        ErrorKind.AUTH_FAILED,
        "SVN authentication failed. Check your credentials.",
    ),
    (
        ("Unable to connect", "Network is unreachable"),
        ErrorKind.NETWORK_ERROR,
        "Unable to connect to SVN server",
    ),
    (
        ("non-existent", "not found"),
        ErrorKind.FILE_NOT_FOUND,
        "The specified path or revision was not found",
    ),
    (
        ("No such revision",),
        ErrorKind.INVALID_REVISION,
        "Invalid revision specified",
    ),
)


def classify_failure(text: str, returncode: int) -> SvnError:
    """Map the diagnostic text of a failed svn run onto an error kind.

    Args:
        text: stderr followed by stdout of the failed process
        returncode: Its exit status

    Returns:
        The first matching classification, COMMAND_FAILED otherwise
    """
    for phrases, kind, message in _FAILURE_PATTERNS:
        if any(phrase in text for phrase in phrases):
            return SvnError(kind, message, details=text, returncode=returncode)
    return SvnError(
        ErrorKind.COMMAND_FAILED,
        f"SVN command failed with exit code {returncode}",
        details=text,
        returncode=returncode,
    )


def build_args(
    command: str,
    args: Sequence[str],
    config: SvnConfig,
    *,
    use_credentials: bool,
) -> list[str]:
    """Build the svn argument vector (without the binary).

    Credentials are attached only when requested and both username and
    password are configured. ``--non-interactive`` is always present once.
    """
    full = [command, *args]
    if use_credentials and config.username and config.password:
        full += [
            "--username",
            config.username,
            "--password",
            config.password,
            "--no-auth-cache",
        ]
    if NON_INTERACTIVE not in full:
        full.append(NON_INTERACTIVE)
    return full


def _masked(cmd: Sequence[str]) -> str:
    """Render a command line with the password value hidden."""
    out: list[str] = []
    hide_next = False
    for part in cmd:
        out.append(_MASK if hide_next else part)
        hide_next = part == "--password"
    return " ".join(out)


class SvnExecutor:
    """Runs svn subcommands for one configuration.

    Attributes:
        config: Connection settings (credentials, default timeout)
        binary: svn executable name or path
    """

    def __init__(self, config: SvnConfig, binary: str = "svn") -> None:
        self.config = config
        self.binary = binary

    async def execute(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        use_credentials: bool = False,
        working_dir: Path | None = None,
        timeout_ms: int | None = None,
    ) -> Result[str, SvnError]:
        """Run ``svn <command> <args>``.

        Args:
            command: svn subcommand (e.g. "info", "log")
            args: Subcommand arguments
            use_credentials: Attach configured credentials
            working_dir: Directory to run in
            timeout_ms: Timeout in milliseconds (config default if None)

        Returns:
            Ok(stdout) verbatim on exit status 0, Err(SvnError) otherwise
        """
        timeout = timeout_ms if timeout_ms is not None else self.config.timeout_ms
        cmd = [self.binary, *build_args(command, args, self.config, use_credentials=use_credentials)]
        logger.debug(f"Running: {_masked(cmd)} (cwd={working_dir}, timeout={timeout}ms)")

        result = await run_process(cmd, cwd=working_dir, timeout=timeout / 1000)
        match result:
            case Ok(output):
                logger.debug(f"svn {command} finished in {output.elapsed:.2f}s")
                return Ok(output.stdout)
            case Err(e):
                error = self._to_svn_error(e, cmd, timeout)
                logger.warning(f"svn {command} failed: {error.kind} ({error.message})")
                return Err(error)

    def _to_svn_error(self, e: ProcessError, cmd: Sequence[str], timeout_ms: int) -> SvnError:
        match e.reason:
            case FailureReason.TIMEOUT:
                return SvnError(
                    ErrorKind.TIMEOUT,
                    f"SVN command timed out after {timeout_ms}ms",
                    details=f"Command: {_masked(cmd)}",
                )
            case FailureReason.NOT_FOUND:
                return SvnError(
                    ErrorKind.NOT_INSTALLED,
                    "SVN command not found. Please ensure SVN is installed and in your PATH.",
                    details=e.stderr,
                )
            case FailureReason.OS_ERROR:
                return SvnError(
                    ErrorKind.COMMAND_FAILED,
                    f"Failed to execute SVN command: {e.stderr}",
                    details=e.stderr,
                )
            case FailureReason.EXIT:
                # stderr first so svn's "E155007: ..." lines lead the details
                text = "\n".join(part for part in (e.stderr, e.stdout) if part)
                return classify_failure(text, e.returncode)

    async def version(self) -> Result[str, SvnError]:
        """Return the installed svn version (``svn --version --quiet``)."""
        result = await self.execute("--version", ["--quiet"], timeout_ms=PROBE_TIMEOUT_MS)
        return result.map(str.strip)

    async def is_installed(self) -> bool:
        """Probe for a usable svn binary. Advisory only."""
        return isinstance(await self.version(), Ok)
