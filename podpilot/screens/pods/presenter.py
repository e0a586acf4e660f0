"""Pods screen presenter - turns store contents into tagged view lines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from rich.text import Text

from podpilot.constants.enums import FetchState, PodPhase, ResourceClass
from podpilot.constants.values import (
    FETCH_FAILED_PREFIX,
    FETCHING_PLACEHOLDER,
    STYLE_DIM,
    STYLE_ERROR,
    STYLE_HEADING,
    STYLE_MARKED,
    STYLE_PENDING,
    STYLE_WARNING,
)
from podpilot.models.core import PodInfo
from podpilot.models.state.reconciliation_store import ReconciliationStore


@dataclass(frozen=True)
class PodRef:
    """Line refers to a pod."""

    name: str


@dataclass(frozen=True)
class ContextRef:
    """Line refers to the kubeconfig context."""

    name: str


LineRef = PodRef | ContextRef | None


@dataclass(frozen=True)
class ViewLine:
    """One display line and the object it stands for."""

    text: Text
    ref: LineRef = None


class PodsPresenter:
    """Presenter for PodsScreen - formats context and pods for display."""

    _LABEL_WIDTH = 11
    _MARK_COLUMN = 2
    _HEALTHY_STATES = frozenset({PodPhase.RUNNING.value, PodPhase.SUCCEEDED.value, "Completed"})
    _FAILED_STATES = frozenset({
        PodPhase.FAILED.value,
        "Error",
        "CrashLoopBackOff",
        "ImagePullBackOff",
        "ErrImagePull",
        "OOMKilled",
    })
    _COLUMNS = ("NAME", "STATUS", "READY", "RESTARTS", "AGE")

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(timezone.utc))

    def build_lines(self, store: ReconciliationStore) -> list[ViewLine]:
        """Build every line of the pods view."""
        return [
            *self.context_lines(store),
            ViewLine(Text("")),
            *self.pod_lines(store),
        ]

    # =========================================================================
    # Context section
    # =========================================================================

    def _label(self, label: str) -> Text:
        return Text(f"{label}:".ljust(self._LABEL_WIDTH), style=STYLE_HEADING)

    def _status_text(self, store: ReconciliationStore, resource_class: ResourceClass) -> Text:
        status = store.fetch_status(resource_class)
        if status.state is FetchState.ERROR:
            return Text(f"{FETCH_FAILED_PREFIX}: {status.error_message}", style=STYLE_ERROR)
        return Text(FETCHING_PLACEHOLDER, style=STYLE_DIM)

    def context_lines(self, store: ReconciliationStore) -> list[ViewLine]:
        context = store.context()
        if context is None:
            return [
                ViewLine(self._label("Context") + self._status_text(store, ResourceClass.CONTEXT))
            ]

        ref = ContextRef(context.name)
        lines = [
            ViewLine(self._label("Context") + Text(context.name), ref),
            ViewLine(self._label("Cluster") + Text(context.cluster), ref),
            ViewLine(self._label("Namespace") + Text(context.namespace), ref),
        ]
        status = store.fetch_status(ResourceClass.CONTEXT)
        if status.state is FetchState.ERROR:
            lines.append(ViewLine(self._status_text(store, ResourceClass.CONTEXT)))
        return lines

    # =========================================================================
    # Pods section
    # =========================================================================

    def pod_lines(self, store: ReconciliationStore) -> list[ViewLine]:
        if not store.has_snapshot(ResourceClass.PODS):
            return [
                ViewLine(Text("Pods", style=STYLE_HEADING)),
                ViewLine(Text("  ") + self._status_text(store, ResourceClass.PODS)),
            ]

        pods = store.pods()
        lines = [ViewLine(Text(f"Pods ({len(pods)})", style=STYLE_HEADING))]
        status = store.fetch_status(ResourceClass.PODS)
        if status.state is FetchState.ERROR:
            lines.append(ViewLine(Text("  ") + self._status_text(store, ResourceClass.PODS)))
        if not pods:
            lines.append(ViewLine(Text("  No pods found", style=STYLE_DIM)))
            return lines

        widths = self._column_widths(pods)
        header = Text(" " * self._MARK_COLUMN)
        for column, width in zip(self._COLUMNS, widths, strict=True):
            header.append(column.ljust(width + 2), style=STYLE_HEADING)
        header.rstrip()
        lines.append(ViewLine(header))

        now = self._now()
        for pod in pods:
            text = self.format_pod(
                pod,
                widths,
                marked=store.is_marked(pod.name),
                pending=store.is_pending(pod.name),
                now=now,
            )
            lines.append(ViewLine(text, PodRef(pod.name)))
        return lines

    def _column_widths(self, pods: list[PodInfo]) -> list[int]:
        rows = [self._cells(pod, None) for pod in pods]
        return [
            max(len(self._COLUMNS[index]), *(len(row[index]) for row in rows))
            for index in range(len(self._COLUMNS))
        ]

    def _cells(self, pod: PodInfo, now: datetime | None) -> tuple[str, str, str, str, str]:
        age = self.format_age(pod.start_time, now or self._now())
        return (pod.name, pod.state, pod.ready, str(pod.restart_count), age)

    def state_style(self, state: str) -> str:
        if state in self._HEALTHY_STATES:
            return STYLE_DIM
        if state in self._FAILED_STATES:
            return STYLE_ERROR
        return STYLE_WARNING

    @staticmethod
    def restarts_style(restart_count: int) -> str:
        return STYLE_DIM if restart_count == 0 else STYLE_WARNING

    def format_pod(
        self,
        pod: PodInfo,
        widths: list[int],
        *,
        marked: bool = False,
        pending: bool = False,
        now: datetime | None = None,
    ) -> Text:
        """Format one pod row.

        Marked pods carry a ``D`` in the mark column; pods with a pending
        deletion are dimmed and struck through as a whole.
        """
        name, state, ready, restarts, age = self._cells(pod, now)
        text = Text()
        text.append("D".ljust(self._MARK_COLUMN) if marked else " " * self._MARK_COLUMN, STYLE_MARKED)
        text.append(name.ljust(widths[0] + 2), STYLE_MARKED if marked else None)
        text.append(state, self.state_style(state))
        text.append(" " * (widths[1] - len(state) + 2))
        text.append(ready.ljust(widths[2] + 2))
        text.append(restarts, self.restarts_style(pod.restart_count))
        text.append(" " * (widths[3] - len(restarts) + 2))
        text.append(age, STYLE_DIM)
        if pending:
            text.stylize(STYLE_PENDING)
        return text

    @staticmethod
    def format_age(start_time: datetime | None, now: datetime) -> str:
        """Compact age such as ``45s``, ``12m``, ``3h`` or ``2d``."""
        if start_time is None:
            return "-"
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)
        seconds = max(0, int((now - start_time).total_seconds()))
        for unit, size in (("d", 86400), ("h", 3600), ("m", 60)):
            if seconds >= size:
                return f"{seconds // size}{unit}"
        return f"{seconds}s"


__all__ = [
    "ContextRef",
    "LineRef",
    "PodRef",
    "PodsPresenter",
    "ViewLine",
]
