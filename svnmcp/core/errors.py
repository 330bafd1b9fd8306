"""Error taxonomy for svn invocations.

``ErrorKind`` is the closed set of failure classes produced when running
``svn``. ``SvnError`` carries a kind together with a human-readable message
and the raw diagnostic text of the subprocess. ``ParseError`` is kept apart
from the taxonomy: it signals output that could not be understood, not a
failed command.

``ExitCode`` maps failures onto stable shell exit statuses for the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

__all__ = ["ErrorKind", "ExitCode", "ParseError", "SvnError"]


class ErrorKind(StrEnum):
    """Failure classes for an svn invocation.

    Values are the codes shown to MCP clients and should remain stable.
    """

    NOT_INSTALLED = "SVN_NOT_INSTALLED"
    NOT_WORKING_COPY = "NOT_WORKING_COPY"
    AUTH_FAILED = "AUTH_FAILED"
    NETWORK_ERROR = "NETWORK_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_REVISION = "INVALID_REVISION"
    COMMAND_FAILED = "COMMAND_FAILED"
    TIMEOUT = "TIMEOUT"


@dataclass(frozen=True, slots=True)
class SvnError:
    """A classified svn failure.

    Attributes:
        kind: Failure class
        message: Short human-readable description
        details: Raw stdout/stderr text or the invoked command line
        returncode: Exit status when the process ran to completion
    """

    kind: ErrorKind
    message: str
    details: str | None = None
    returncode: int | None = None

    @property
    def code(self) -> str:
        """Wire code of the error kind."""
        return str(self.kind)

    def __str__(self) -> str:
        return f"{self.message} ({self.kind})"


@dataclass(frozen=True, slots=True)
class ParseError:
    """svn produced output that is not structurally valid."""

    message: str
    details: str | None = None

    def __str__(self) -> str:
        return self.message


class ExitCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad path, bad revision)
    - 2: Environment error (svn missing, not a working copy)
    - 3: Command error (svn failed, unreadable output)
    - 4: Network error (unreachable server, authentication, timeout)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    COMMAND_ERROR = 3
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ExitCode.OK
