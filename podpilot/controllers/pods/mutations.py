"""Mutation coordinator - deletes marked pods with per-pod rollback."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from podpilot.controllers.kubectl import KubectlCommands
from podpilot.controllers.process.runner import (
    Failure,
    ProcessHandle,
    ProcessRunner,
    Success,
)
from podpilot.errors import NoMarksError, ProcessFailure
from podpilot.models.state.reconciliation_store import ReconciliationStore

logger = logging.getLogger(__name__)

DeleteErrorCallback = Callable[[str, ProcessFailure], None]


class MutationCoordinator:
    """Issues delete requests for marked pods.

    Each deletion is independent: its mark is cleared by its own completion,
    and a failed request rolls back only its own pending state. The pending
    entry of a successful request is cleared later, when a pods snapshot no
    longer lists the pod.
    """

    def __init__(
        self,
        store: ReconciliationStore,
        runner: ProcessRunner,
        commands: KubectlCommands,
        on_deleted: Callable[[], None] | None = None,
        on_error: DeleteErrorCallback | None = None,
    ) -> None:
        self._store = store
        self._runner = runner
        self._commands = commands
        self._on_deleted = on_deleted
        self._on_error = on_error
        self._handles: dict[str, ProcessHandle] = {}

    def set_error_callback(self, on_error: DeleteErrorCallback | None) -> None:
        self._on_error = on_error

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._handles)

    def execute_marks(self) -> list[str]:
        """Delete every marked pod that has no delete request outstanding.

        Returns:
            Names for which a delete request was issued, sorted.

        Raises:
            NoMarksError: No marked pod is left to delete. No process is
                started.
        """
        pending = self._store.pending_deletion
        names = sorted(
            name for name in self._store.marked
            if name not in pending and name not in self._handles
        )
        if not names:
            raise NoMarksError()

        with self._store.batch():
            for name in names:
                self._store.begin_deletion(name)
        for name in names:
            self._delete(name)
        logger.info("Issued deletion for %d pod(s)", len(names))
        return names

    def _delete(self, name: str) -> None:
        handle = self._runner.run(
            self._commands.delete_pod(name),
            on_success=lambda result: self._succeeded(name, result),
            on_failure=lambda result: self._failed(name, result),
        )
        self._handles[name] = handle

    def _succeeded(self, name: str, result: Success) -> None:
        self._handles.pop(name, None)
        if not re.search(rf"\bpods?/{re.escape(name)}\b", result.output):
            logger.warning("Unexpected output deleting pod %s: %r", name, result.output.strip())
        self._store.unmark(name)
        if self._on_deleted is not None:
            self._on_deleted()

    def _failed(self, name: str, result: Failure) -> None:
        handle = self._handles.pop(name, None)
        failure = ProcessFailure(
            result.output,
            result.exit_status,
            handle.command if handle is not None else self._commands.delete_pod(name),
        )
        logger.error("Deleting pod %s failed: %s", name, failure)
        with self._store.batch():
            self._store.rollback_deletion(name)
            self._store.unmark(name)
        if self._on_error is not None:
            self._on_error(name, failure)

    def cancel_all(self) -> None:
        """Cancel outstanding delete requests without rolling them back."""
        handles, self._handles = self._handles, {}
        for handle in handles.values():
            handle.cancel()


__all__ = [
    "DeleteErrorCallback",
    "MutationCoordinator",
]
