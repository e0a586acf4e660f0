"""Reconciliation store - snapshots plus optimistic pod state.

The store is the only owner of snapshots, the marked set and the pending
deletion set. Optimistic sets never reference a pod that is missing from the
latest pods snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from podpilot.constants.enums import FetchState, ResourceClass
from podpilot.controllers.pods.parsers import ContextParser, PodParser
from podpilot.models.core import ContextInfo, PodInfo

logger = logging.getLogger(__name__)

ChangeCallback = Callable[["ReconciliationStore"], None]


@dataclass
class FetchStatus:
    """Status tracking for a single resource class fetch."""

    resource_class: ResourceClass
    state: FetchState = FetchState.IDLE
    error_message: str | None = None
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "resource_class": self.resource_class.value,
            "state": self.state.value,
            "error_message": self.error_message,
            "last_updated": self.last_updated.isoformat()
            if self.last_updated
            else None,
        }


class ReconciliationStore:
    """Session-scoped cluster view with marks and pending deletions."""

    def __init__(
        self,
        on_change: ChangeCallback | None = None,
        pod_parser: PodParser | None = None,
        context_parser: ContextParser | None = None,
    ) -> None:
        self._on_change = on_change
        self._pod_parser = pod_parser or PodParser()
        self._context_parser = context_parser or ContextParser()
        self._snapshots: dict[ResourceClass, Any] = {}
        self._pods: list[PodInfo] = []
        self._pod_names: set[str] = set()
        self._context: ContextInfo | None = None
        self._marked: set[str] = set()
        self._pending: set[str] = set()
        self._fetch_states: dict[ResourceClass, FetchStatus] = {
            resource_class: FetchStatus(resource_class) for resource_class in ResourceClass
        }
        self._batch_depth = 0
        self._dirty = False

    # =========================================================================
    # Change notification
    # =========================================================================

    def set_change_callback(self, on_change: ChangeCallback | None) -> None:
        self._on_change = on_change

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Coalesce every change made inside the block into one notification."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._notify()

    def _changed(self) -> None:
        self._dirty = True
        if self._batch_depth == 0:
            self._notify()

    def _notify(self) -> None:
        self._dirty = False
        if self._on_change is not None:
            self._on_change(self)

    # =========================================================================
    # Snapshots
    # =========================================================================

    def apply_snapshot(self, resource_class: ResourceClass, value: Any) -> None:
        """Replace the snapshot for a class and reconcile optimistic state.

        Raises:
            ParseFailure: The snapshot cannot be projected. Nothing changes.
        """
        if resource_class is ResourceClass.PODS:
            pods = self._pod_parser.parse_pod_list(value)
            self._pods = pods
            self._pod_names = {pod.name for pod in pods}
            self._prune()
        elif resource_class is ResourceClass.CONTEXT:
            self._context = self._context_parser.parse_context(value)

        self._snapshots[resource_class] = value
        status = self._fetch_states[resource_class]
        status.state = FetchState.SUCCESS
        status.error_message = None
        status.last_updated = datetime.now(timezone.utc)
        self._changed()

    def _prune(self) -> None:
        stale_marks = self._marked - self._pod_names
        stale_pending = self._pending - self._pod_names
        if stale_marks or stale_pending:
            logger.debug(
                "Pruned marks %s and pending deletions %s",
                sorted(stale_marks),
                sorted(stale_pending),
            )
        self._marked &= self._pod_names
        self._pending &= self._pod_names

    def clear_snapshot(self, resource_class: ResourceClass) -> None:
        """Forget a snapshot; for pods also drops all optimistic state."""
        self._snapshots.pop(resource_class, None)
        if resource_class is ResourceClass.PODS:
            self._pods = []
            self._pod_names = set()
            self._marked.clear()
            self._pending.clear()
        elif resource_class is ResourceClass.CONTEXT:
            self._context = None
        self._fetch_states[resource_class] = FetchStatus(resource_class)
        self._changed()

    def snapshot(self, resource_class: ResourceClass) -> Any:
        """Return the last snapshot of a class, or None if never fetched."""
        return self._snapshots.get(resource_class)

    def has_snapshot(self, resource_class: ResourceClass) -> bool:
        return resource_class in self._snapshots

    def pods(self) -> list[PodInfo]:
        return list(self._pods)

    def context(self) -> ContextInfo | None:
        return self._context

    def pod_raw(self, name: str) -> Mapping[str, Any] | None:
        """Raw JSON of one pod from the current snapshot."""
        snapshot = self._snapshots.get(ResourceClass.PODS)
        if snapshot is None:
            return None
        return self._pod_parser.find_pod(snapshot, name)

    # =========================================================================
    # Fetch status
    # =========================================================================

    def set_fetching(self, resource_class: ResourceClass) -> None:
        status = self._fetch_states[resource_class]
        status.state = FetchState.LOADING
        status.error_message = None
        self._changed()

    def set_fetch_failed(self, resource_class: ResourceClass, message: str) -> None:
        """Record a failed fetch; the previous snapshot stays in place."""
        status = self._fetch_states[resource_class]
        status.state = FetchState.ERROR
        status.error_message = message
        self._changed()

    def fetch_status(self, resource_class: ResourceClass) -> FetchStatus:
        return self._fetch_states[resource_class]

    # =========================================================================
    # Optimistic state
    # =========================================================================

    @property
    def marked(self) -> frozenset[str]:
        return frozenset(self._marked)

    @property
    def pending_deletion(self) -> frozenset[str]:
        return frozenset(self._pending)

    def is_marked(self, name: str) -> bool:
        return name in self._marked

    def is_pending(self, name: str) -> bool:
        return name in self._pending

    def mark(self, name: str) -> bool:
        """Flag a pod for deletion.

        Returns:
            True if the pod was marked; False when it is already being
            deleted or is not in the current snapshot.
        """
        if name in self._pending or name not in self._pod_names:
            return False
        if name not in self._marked:
            self._marked.add(name)
            self._changed()
        return True

    def unmark(self, name: str) -> None:
        if name in self._marked:
            self._marked.discard(name)
            self._changed()

    def unmark_all(self) -> None:
        if self._marked:
            self._marked.clear()
            self._changed()

    def begin_deletion(self, name: str) -> None:
        """Record that a delete request for the pod has been sent."""
        if name in self._pod_names and name not in self._pending:
            self._pending.add(name)
            self._changed()

    def rollback_deletion(self, name: str) -> None:
        """Drop a pending deletion after its request failed."""
        if name in self._pending:
            self._pending.discard(name)
            self._changed()

    def clear(self) -> None:
        """Drop all snapshots and optimistic state."""
        self._snapshots.clear()
        self._pods = []
        self._pod_names = set()
        self._context = None
        self._marked.clear()
        self._pending.clear()
        self._fetch_states = {
            resource_class: FetchStatus(resource_class) for resource_class in ResourceClass
        }
        self._changed()


__all__ = [
    "ChangeCallback",
    "FetchStatus",
    "ReconciliationStore",
]
