"""Resource poller - single-flight fetch coordination per resource class.

At most one query per ResourceClass is ever outstanding. A poll requested
while one is in flight is dropped, which is what lets the periodic timer and
manual refreshes share a single pipeline.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from podpilot.constants.enums import ResourceClass
from podpilot.controllers.process.runner import (
    Failure,
    ProcessHandle,
    ProcessRunner,
    Success,
)
from podpilot.errors import PodPilotError, ProcessFailure

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ResourceClass, Any], None]
ErrorCallback = Callable[[ResourceClass, PodPilotError], None]


@dataclass(frozen=True)
class FetchOperation:
    """How to query one resource class.

    Attributes:
        build_args: Returns the command arguments for the query.
        parse: Turns command output into the snapshot value; may raise
            ParseFailure.
    """

    build_args: Callable[[], tuple[str, ...]]
    parse: Callable[[str], Any]


class ResourcePoller:
    """Generic single-flight async fetch coordinator."""

    def __init__(
        self,
        runner: ProcessRunner,
        on_result: ResultCallback,
        on_error: ErrorCallback | None = None,
        on_start: Callable[[ResourceClass], None] | None = None,
    ) -> None:
        self._runner = runner
        self._on_result = on_result
        self._on_error = on_error
        self._on_start = on_start
        self._operations: dict[ResourceClass, FetchOperation] = {}
        self._in_flight: dict[ResourceClass, ProcessHandle] = {}
        self._waiters: dict[ResourceClass, list[asyncio.Future[Any]]] = {}

    @property
    def resource_classes(self) -> list[ResourceClass]:
        return list(self._operations)

    def register(self, resource_class: ResourceClass, operation: FetchOperation) -> None:
        self._operations[resource_class] = operation

    def in_flight(self, resource_class: ResourceClass) -> ProcessHandle | None:
        return self._in_flight.get(resource_class)

    def poll(self, resource_class: ResourceClass) -> ProcessHandle:
        """Start a fetch for the class unless one is already running.

        Returns:
            The in-flight handle, new or existing.
        """
        existing = self._in_flight.get(resource_class)
        if existing is not None:
            logger.debug("Poll for %s skipped; request in flight", resource_class.value)
            return existing

        operation = self._operations[resource_class]
        handle = self._runner.run(
            operation.build_args(),
            on_success=lambda result: self._complete(resource_class, handle, result),
            on_failure=lambda result: self._complete(resource_class, handle, result),
        )
        self._in_flight[resource_class] = handle
        if self._on_start is not None:
            self._on_start(resource_class)
        return handle

    def reset(self, resource_class: ResourceClass) -> None:
        """Cancel and forget any in-flight fetch for the class."""
        handle = self._in_flight.pop(resource_class, None)
        if handle is not None:
            handle.cancel()
        for waiter in self._waiters.pop(resource_class, []):
            waiter.cancel()

    def reset_all(self) -> None:
        for resource_class in list(self._operations):
            self.reset(resource_class)

    async def wait_for(self, resource_class: ResourceClass) -> Any:
        """Wait for the next completed fetch of a class and return its value.

        Starts a poll when none is in flight. Yields to the event loop while
        waiting.

        Raises:
            ProcessFailure: The fetch failed.
            ParseFailure: The output could not be parsed.
        """
        waiter: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._waiters.setdefault(resource_class, []).append(waiter)
        self.poll(resource_class)
        return await waiter

    def _complete(
        self,
        resource_class: ResourceClass,
        handle: ProcessHandle,
        result: Success | Failure,
    ) -> None:
        if self._in_flight.get(resource_class) is handle:
            del self._in_flight[resource_class]
        waiters = self._waiters.pop(resource_class, [])

        error: PodPilotError | None = None
        value: Any = None
        if isinstance(result, Failure):
            error = ProcessFailure(result.output, result.exit_status, handle.command)
        else:
            try:
                value = self._operations[resource_class].parse(result.output)
            except PodPilotError as exc:
                error = exc

        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(value)

        if error is None:
            self._on_result(resource_class, value)
            return

        logger.error("Fetching %s failed: %s", resource_class.value, error)
        if self._on_error is None:
            raise error
        self._on_error(resource_class, error)


__all__ = [
    "ErrorCallback",
    "FetchOperation",
    "ResourcePoller",
    "ResultCallback",
]
