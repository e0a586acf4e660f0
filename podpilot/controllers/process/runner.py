"""Process runner - spawns external commands and resolves them asynchronously.

Every command runs as an asyncio subprocess with stderr merged into stdout.
Completion is delivered to plain callbacks on the event loop, so callers never
block the interactive session while kubectl is running.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Generator, Sequence
from contextlib import suppress
from dataclasses import dataclass
from typing import Any

from podpilot.constants.defaults import KUBECTL_PATH_DEFAULT
from podpilot.errors import CancellationNoop, ProcessFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Success:
    """Command exited with status zero."""

    output: str


@dataclass(frozen=True, slots=True)
class Failure:
    """Command exited with a nonzero status or could not be spawned."""

    output: str
    exit_status: int


ProcessResult = Success | Failure

SuccessCallback = Callable[[Success], None]
FailureCallback = Callable[[Failure], None]


class ProcessHandle:
    """A single running command.

    The handle is awaitable: awaiting it yields the ``ProcessResult`` once the
    continuations have run, or re-raises whatever they raised.
    """

    _READ_CHUNK_SIZE = 64 * 1024
    _SPAWN_ERROR_STATUS = 127

    def __init__(
        self,
        command: Sequence[str],
        on_success: SuccessCallback,
        on_failure: FailureCallback | None = None,
    ) -> None:
        self.command = tuple(command)
        self._on_success = on_success
        self._on_failure = on_failure
        self._process: asyncio.subprocess.Process | None = None
        self._chunks: list[bytes] | None = []
        self._result: ProcessResult | None = None
        self._cancelled = False
        self._awaited = False
        self._task: asyncio.Task[ProcessResult | None] | None = None

    def start(self) -> ProcessHandle:
        """Schedule the command on the running event loop."""
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._execute(), name=f"process:{self.command[0]}")
        self._task.add_done_callback(self._report_unhandled)
        return self

    @property
    def done(self) -> bool:
        """True once the command has finished or the handle was cancelled."""
        return self._cancelled or (self._task is not None and self._task.done())

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def result(self) -> ProcessResult | None:
        """Result of the finished command, None while running or if cancelled."""
        return self._result

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def returncode(self) -> int | None:
        """Exit status of the spawned process; None while it runs or if it never spawned."""
        return self._process.returncode if self._process is not None else None

    def __await__(self) -> Generator[Any, None, ProcessResult | None]:
        if self._task is None:
            raise RuntimeError("Process handle was never started")
        self._awaited = True
        return self._task.__await__()

    def cancel(self) -> None:
        """Silence continuations, drop buffered output and kill the process.

        Safe to call any number of times, including after the command exited.
        """
        try:
            self._cancel()
        except CancellationNoop:
            logger.debug("Cancel on finished process %s ignored", self.command)

    def _cancel(self) -> None:
        already_finished = self.done
        self._cancelled = True
        self._chunks = None
        if already_finished:
            raise CancellationNoop(f"{self.command!r} already finished")

        if self._task is not None:
            self._task.cancel()
        process = self._process
        if process is not None and process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
            logger.debug("Killed process %s (pid=%s)", self.command, process.pid)

    async def _execute(self) -> ProcessResult | None:
        logger.debug("Spawning %s", self.command)
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            result: ProcessResult = Failure(output=str(exc), exit_status=self._SPAWN_ERROR_STATUS)
        else:
            try:
                exit_status = await self._collect(self._process)
            except asyncio.CancelledError:
                await self._reap(self._process)
                raise
            output = b"".join(self._chunks or ()).decode("utf-8", errors="replace")
            if exit_status == 0:
                result = Success(output=output)
            else:
                result = Failure(output=output, exit_status=exit_status)

        if self._cancelled:
            return None

        logger.debug("Process %s finished: %s", self.command, type(result).__name__)
        self._result = result
        self._chunks = None
        if isinstance(result, Success):
            self._on_success(result)
        elif self._on_failure is not None:
            self._on_failure(result)
        else:
            raise ProcessFailure(result.output, result.exit_status, self.command)
        return result

    async def _collect(self, process: asyncio.subprocess.Process) -> int:
        stream = process.stdout
        if stream is not None:
            while chunk := await stream.read(self._READ_CHUNK_SIZE):
                if self._chunks is not None:
                    self._chunks.append(chunk)
        return await process.wait()

    async def _reap(self, process: asyncio.subprocess.Process) -> None:
        """Kill and wait for a cancelled process so its pipes and transport close."""
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
        await process.wait()
        logger.debug("Reaped cancelled process %s (status=%s)", self.command, process.returncode)

    def _report_unhandled(self, task: asyncio.Task[ProcessResult | None]) -> None:
        """Surface continuation errors nobody is awaiting to the loop handler."""
        if self._awaited or task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        task.get_loop().call_exception_handler(
            {
                "message": f"Unhandled failure in {self.command!r}",
                "exception": exc,
                "task": task,
            }
        )


class ProcessRunner:
    """Runs one program (kubectl by default) with per-call arguments."""

    def __init__(
        self,
        program: str = KUBECTL_PATH_DEFAULT,
        base_args: Sequence[str] = (),
    ) -> None:
        self.program = program
        self.base_args = tuple(base_args)

    def build_command(self, args: Sequence[str]) -> tuple[str, ...]:
        return (self.program, *self.base_args, *args)

    def run(
        self,
        args: Sequence[str],
        on_success: SuccessCallback,
        on_failure: FailureCallback | None = None,
    ) -> ProcessHandle:
        """Start a command and return its handle immediately.

        Args:
            args: Arguments appended after the program and base arguments.
            on_success: Called with ``Success`` on exit status zero.
            on_failure: Called with ``Failure`` otherwise. When omitted a
                failure raises ``ProcessFailure`` out of the handle.

        Returns:
            The started ProcessHandle.
        """
        handle = ProcessHandle(self.build_command(args), on_success, on_failure)
        return handle.start()

    async def run_once(self, args: Sequence[str]) -> str:
        """Run a command to completion and return its output.

        Raises:
            ProcessFailure: The command exited with a nonzero status.
        """
        handle = self.run(args, on_success=_ignore_result)
        result = await handle
        if result is None:
            raise asyncio.CancelledError()
        return result.output


def _ignore_result(_: Success) -> None:
    return None


__all__ = [
    "Failure",
    "FailureCallback",
    "ProcessHandle",
    "ProcessResult",
    "ProcessRunner",
    "Success",
    "SuccessCallback",
]
