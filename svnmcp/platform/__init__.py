"""Platform abstraction layer."""

from .process import (
    FailureReason,
    ProcessError,
    ProcessOutput,
    run,
)

__all__ = [
    # process
    "FailureReason",
    "ProcessError",
    "ProcessOutput",
    "run",
]
