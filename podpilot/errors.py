"""Error taxonomy for cluster queries and pod mutations."""

from __future__ import annotations

from collections.abc import Sequence

from podpilot.constants.enums import ResourceClass
from podpilot.constants.limits import ERROR_MESSAGE_MAX_LENGTH


class PodPilotError(Exception):
    """Base exception for all PodPilot errors."""


class ProcessFailure(PodPilotError):
    """An external command exited with a nonzero status.

    Attributes:
        output: Full captured output (stdout and stderr combined).
        exit_status: Process exit status.
        command: Command line that was run.
    """

    def __init__(
        self,
        output: str,
        exit_status: int,
        command: Sequence[str] = (),
    ) -> None:
        self.output = output
        self.exit_status = exit_status
        self.command = tuple(command)
        super().__init__(summarize_process_output(output) or f"exit status {exit_status}")


class ParseFailure(PodPilotError):
    """Command output was not in the expected structured form."""

    def __init__(
        self,
        message: str,
        resource_class: ResourceClass | None = None,
    ) -> None:
        self.resource_class = resource_class
        super().__init__(message)


class NoMarksError(PodPilotError):
    """Raised when marked deletions are executed with nothing marked."""

    def __init__(self) -> None:
        super().__init__("No pods are marked")


class CancellationNoop(PodPilotError):
    """Cancel requested on a handle that has already completed.

    Never surfaced to callers; ``ProcessHandle.cancel`` swallows it.
    """


def summarize_process_output(output: str) -> str:
    """Extract a concise, user-facing message from kubectl output."""
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        return ""

    selected_line = lines[-1]
    for line in lines:
        if line.lower().startswith("error"):
            selected_line = line
            break

    cleaned = selected_line.removeprefix("error:").strip()
    if len(cleaned) > ERROR_MESSAGE_MAX_LENGTH:
        return f"{cleaned[:ERROR_MESSAGE_MAX_LENGTH - 3].rstrip()}..."
    return cleaned


__all__ = [
    "CancellationNoop",
    "NoMarksError",
    "ParseFailure",
    "PodPilotError",
    "ProcessFailure",
    "summarize_process_output",
]
