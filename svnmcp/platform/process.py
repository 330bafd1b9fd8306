"""Asynchronous subprocess execution with Result-based error handling.

Wraps ``asyncio.create_subprocess_exec`` so that awaiting a command
suspends only the calling task. Output is captured and failures are
returned as structured errors instead of exceptions.

Usage:
    result = await run(["svn", "--version", "--quiet"], timeout=5.0)
    match result:
        case Ok(output):
            print(output.stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from svnmcp.core.result import Err, Ok, Result

__all__ = ["FailureReason", "ProcessError", "ProcessOutput", "run"]


class FailureReason(StrEnum):
    """Why a process did not produce a successful result."""

    EXIT = "exit"  # ran to completion with a non-zero status
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"  # executable missing
    OS_ERROR = "os_error"  # any other spawn failure


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured output of a finished process.

    Attributes:
        command: The command that was executed
        returncode: Exit status
        stdout: Standard output, decoded verbatim
        stderr: Standard error, decoded verbatim
        elapsed: Wall-clock duration in seconds
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    elapsed: float


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed
        returncode: Exit status, -1 if the process never completed
        stdout: Standard output (may be empty)
        stderr: Standard error, or the spawn/timeout description
        reason: Failure class
        elapsed: Seconds spent before the failure was detected
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    reason: FailureReason = FailureReason.EXIT
    elapsed: float = 0.0

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.reason is FailureReason.TIMEOUT:
            return f"{cmd_str} timed out"
        if self.reason is FailureReason.EXIT:
            return f"{cmd_str} failed (exit {self.returncode})"
        return f"{cmd_str} could not be started"


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def run(
    cmd: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Execute a command and return its output or a structured error.

    stdin is closed so the child can never wait on terminal input. When
    ``timeout`` expires, or the awaiting task is cancelled, the child is
    killed and reaped first.

    Args:
        cmd: Command and arguments to execute
        cwd: Working directory (inherits the current one if None)
        env: Environment variables (inherits the current env if None)
        timeout: Maximum seconds to wait (None for no limit)

    Returns:
        Ok(ProcessOutput) on exit status 0, Err(ProcessError) otherwise.
    """
    command = tuple(cmd)
    started = time.monotonic()

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        # A missing cwd also raises FileNotFoundError, naming the directory.
        reason = FailureReason.NOT_FOUND if e.filename in (None, cmd[0]) else FailureReason.OS_ERROR
        return Err(ProcessError(command, -1, "", str(e), reason, time.monotonic() - started))
    except OSError as e:
        return Err(
            ProcessError(command, -1, "", str(e), FailureReason.OS_ERROR, time.monotonic() - started)
        )

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        if proc.returncode is None:
            proc.kill()
        await proc.wait()
        return Err(
            ProcessError(
                command,
                -1,
                "",
                f"Command timed out after {timeout}s",
                FailureReason.TIMEOUT,
                time.monotonic() - started,
            )
        )
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
        await proc.wait()
        raise

    elapsed = time.monotonic() - started
    returncode = proc.returncode if proc.returncode is not None else -1

    if returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=returncode,
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                reason=FailureReason.EXIT,
                elapsed=elapsed,
            )
        )

    return Ok(
        ProcessOutput(
            command=command,
            returncode=returncode,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            elapsed=elapsed,
        )
    )
