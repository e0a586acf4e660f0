"""Pods screen - live pod list with marks, deletion and drill-down."""

from __future__ import annotations

from contextlib import suppress

from rich.text import Text
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, OptionList
from textual.widgets.option_list import Option

from podpilot.constants.enums import ResourceClass
from podpilot.controllers.session import PodSession
from podpilot.errors import NoMarksError, ProcessFailure
from podpilot.keyboard import PODS_SCREEN_BINDINGS
from podpilot.models.state.app_settings import AppSettings
from podpilot.models.state.reconciliation_store import ReconciliationStore
from podpilot.screens.detail import TextDetailScreen
from podpilot.screens.pods.presenter import (
    ContextRef,
    LineRef,
    PodRef,
    PodsPresenter,
    ViewLine,
)
from podpilot.widgets import ConfirmDialog, InputDialog


class PodsScreen(Screen[None]):
    """Pod list for the active context and namespace.

    The screen owns its PodSession: mounting starts the refresh cycle and
    unmounting tears the session down.
    """

    BINDINGS = PODS_SCREEN_BINDINGS
    DEFAULT_CSS = """
    PodsScreen #pods-list {
        height: 1fr;
        border: none;
    }
    """

    def __init__(self, settings: AppSettings, session: PodSession | None = None) -> None:
        super().__init__()
        self.session = session or PodSession(settings)
        self.presenter = PodsPresenter()
        self._lines: list[ViewLine] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield OptionList(id="pods-list")
        yield Footer()

    def on_mount(self) -> None:
        self.session.store.set_change_callback(self._on_store_change)
        self.session.mutations.set_error_callback(self._on_delete_error)
        self.refresh_lines()
        self.session.start()

    def on_unmount(self) -> None:
        self.session.teardown()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _on_store_change(self, _: ReconciliationStore) -> None:
        self.refresh_lines()

    def refresh_lines(self) -> None:
        """Rebuild the list from the store, keeping the cursor on the same item."""
        try:
            option_list = self.query_one("#pods-list", OptionList)
        except NoMatches:
            return

        selected = self.selected_ref()
        previous_index = option_list.highlighted
        self._lines = self.presenter.build_lines(self.session.store)
        option_list.clear_options()
        option_list.add_options(
            [Option(line.text or Text(" "), disabled=line.ref is None) for line in self._lines]
        )

        target = None
        if selected is not None:
            target = next(
                (index for index, line in enumerate(self._lines) if line.ref == selected),
                None,
            )
        if target is None and previous_index is not None:
            target = self._nearest_selectable(previous_index)
        if target is not None:
            option_list.highlighted = target

        context = self.session.context()
        if context is not None:
            self.sub_title = f"{context.name} / {self.session.namespace}"

    def _nearest_selectable(self, index: int) -> int | None:
        candidates = [i for i, line in enumerate(self._lines) if line.ref is not None]
        if not candidates:
            return None
        return min(candidates, key=lambda i: abs(i - index))

    def selected_ref(self) -> LineRef:
        with suppress(NoMatches):
            index = self.query_one("#pods-list", OptionList).highlighted
            if index is not None and index < len(self._lines):
                return self._lines[index].ref
        return None

    def selected_pod(self) -> str | None:
        ref = self.selected_ref()
        return ref.name if isinstance(ref, PodRef) else None

    def _advance_cursor(self) -> None:
        with suppress(NoMatches):
            self.query_one("#pods-list", OptionList).action_cursor_down()

    def _on_delete_error(self, name: str, failure: ProcessFailure) -> None:
        self.notify(f"Deleting {name} failed: {failure}", severity="error")

    # =========================================================================
    # Actions
    # =========================================================================

    def action_mark(self) -> None:
        name = self.selected_pod()
        if name is None:
            return
        if not self.session.mark(name):
            if self.session.store.is_pending(name):
                message = f"{name} is already being deleted"
            else:
                message = f"{name} is no longer listed"
            self.notify(message, severity="warning")
            return
        self._advance_cursor()

    def action_unmark(self) -> None:
        name = self.selected_pod()
        if name is not None:
            self.session.unmark(name)
            self._advance_cursor()

    def action_unmark_all(self) -> None:
        self.session.unmark_all()

    def action_execute_marks(self) -> None:
        store = self.session.store
        marked = sorted(store.marked - store.pending_deletion - self.session.mutations.in_flight)
        if not marked:
            self.notify(str(NoMarksError()), severity="warning")
            return

        def _confirmed(confirmed: bool | None) -> None:
            if not confirmed:
                return
            try:
                names = self.session.execute_marks()
            except NoMarksError as exc:
                self.notify(str(exc), severity="warning")
                return
            self.notify(f"Deleting {len(names)} pod(s)")

        self.app.push_screen(
            ConfirmDialog(f"Delete {len(marked)} pod(s)?\n\n" + "\n".join(marked), title="Execute marks"),
            _confirmed,
        )

    def action_refresh(self) -> None:
        self.session.refresh_all()

    def action_describe(self) -> None:
        name = self.selected_pod()
        if name is not None:
            self.run_worker(self._show_describe(name), group="describe", exclusive=True)

    def action_logs(self) -> None:
        name = self.selected_pod()
        if name is not None:
            self.run_worker(self._show_logs(name), group="logs", exclusive=True)

    def action_set_namespace(self) -> None:
        def _chosen(namespace: str | None) -> None:
            if namespace is not None:
                self.session.set_namespace(namespace)

        self.app.push_screen(
            InputDialog(
                "Namespace",
                value=self.session.namespace or "",
                placeholder="Empty for the context default",
            ),
            _chosen,
        )

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_index >= len(self._lines):
            return
        ref = self._lines[event.option_index].ref
        if isinstance(ref, PodRef):
            body = self.session.render_pod(ref.name)
            if body is not None:
                self.app.push_screen(TextDetailScreen(f"pod/{ref.name}", body))
        elif isinstance(ref, ContextRef):
            snapshot = self.session.store.snapshot(ResourceClass.CONTEXT)
            if snapshot is not None:
                self.app.push_screen(
                    TextDetailScreen(f"context/{ref.name}", self.session.renderer.render_text(snapshot))
                )

    # =========================================================================
    # Workers
    # =========================================================================

    async def _show_describe(self, name: str) -> None:
        try:
            output = await self.session.describe_pod(name)
        except ProcessFailure as exc:
            self.notify(f"Describe {name} failed: {exc}", severity="error")
            return
        self.app.push_screen(TextDetailScreen(f"describe pod/{name}", output))

    async def _show_logs(self, name: str) -> None:
        try:
            output = await self.session.pod_logs(name)
        except ProcessFailure as exc:
            self.notify(f"Logs for {name} failed: {exc}", severity="error")
            return
        self.app.push_screen(TextDetailScreen(f"logs pod/{name}", output))


__all__ = ["PodsScreen"]
