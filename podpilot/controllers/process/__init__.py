"""External process execution."""

from podpilot.controllers.process.runner import (
    Failure,
    ProcessHandle,
    ProcessResult,
    ProcessRunner,
    Success,
)

__all__ = [
    "Failure",
    "ProcessHandle",
    "ProcessResult",
    "ProcessRunner",
    "Success",
]
