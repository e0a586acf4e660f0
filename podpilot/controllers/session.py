"""Pod session - owns every component of one interactive pods session.

All mutable session state lives on a PodSession instance: the process
runner, the reconciliation store, the poller and its in-flight slots, the
refresh timer and outstanding deletions. Tearing the session down releases
all of it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from rich.text import Text

from podpilot.constants.enums import ResourceClass
from podpilot.controllers.base import BaseController
from podpilot.controllers.kubectl import KubectlCommands
from podpilot.controllers.pods.fetchers import ContextFetcher, PodFetcher
from podpilot.controllers.pods.mutations import DeleteErrorCallback, MutationCoordinator
from podpilot.controllers.polling.poller import ResourcePoller
from podpilot.controllers.polling.refresh import RefreshOrchestrator
from podpilot.controllers.process.runner import ProcessRunner
from podpilot.errors import PodPilotError
from podpilot.models.core import ContextInfo
from podpilot.models.state.app_settings import AppSettings
from podpilot.models.state.reconciliation_store import ChangeCallback, ReconciliationStore
from podpilot.utils.structural_renderer import StructuralRenderer

logger = logging.getLogger(__name__)


class PodSession(BaseController):
    """Cluster pods session: polling, reconciliation and mutations."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        runner: ProcessRunner | None = None,
        on_change: ChangeCallback | None = None,
        on_delete_error: DeleteErrorCallback | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Application settings; defaults when omitted.
            runner: Process runner; a kubectl runner built from settings
                when omitted.
            on_change: Render callback, invoked with the store on every
                state change.
            on_delete_error: Invoked with the pod name and failure when a
                delete request fails.
        """
        self.settings = settings or AppSettings()
        self.commands = KubectlCommands(self.settings.context, self.settings.namespace)
        self.runner = runner or ProcessRunner(self.settings.kubectl_path)
        self.store = ReconciliationStore(on_change)
        self.renderer = StructuralRenderer(
            indent_width=self.settings.indent_width,
            inline_threshold=self.settings.inline_threshold,
        )

        self.poller = ResourcePoller(
            self.runner,
            on_result=self._apply_result,
            on_error=self._record_fetch_error,
            on_start=self.store.set_fetching,
        )
        self.poller.register(ResourceClass.PODS, PodFetcher(self.commands).as_operation())
        self.poller.register(ResourceClass.CONTEXT, ContextFetcher(self.commands).as_operation())

        self.orchestrator = RefreshOrchestrator(self.poller, self.settings.refresh_interval)
        self.mutations = MutationCoordinator(
            self.store,
            self.runner,
            self.commands,
            on_deleted=self.refresh_all,
            on_error=on_delete_error,
        )
        self._torn_down = False

    # =========================================================================
    # Poll results
    # =========================================================================

    def _apply_result(self, resource_class: ResourceClass, value: Any) -> None:
        try:
            self.store.apply_snapshot(resource_class, value)
        except PodPilotError as exc:
            self._record_fetch_error(resource_class, exc)

    def _record_fetch_error(self, resource_class: ResourceClass, error: PodPilotError) -> None:
        self.store.set_fetch_failed(resource_class, str(error))

    # =========================================================================
    # Command entry points
    # =========================================================================

    def start(self) -> None:
        """Begin refreshing, periodically when auto refresh is on."""
        self._torn_down = False
        if self.settings.auto_refresh:
            self.orchestrator.start()
        else:
            self.refresh_all()

    def refresh_all(self) -> None:
        if self._torn_down:
            return
        self.orchestrator.refresh_all()

    def mark(self, name: str) -> bool:
        return self.store.mark(name)

    def unmark(self, name: str) -> None:
        self.store.unmark(name)

    def unmark_all(self) -> None:
        self.store.unmark_all()

    def execute_marks(self) -> list[str]:
        """Delete all marked pods.

        Raises:
            NoMarksError: Nothing is marked.
        """
        return self.mutations.execute_marks()

    def set_namespace(self, namespace: str | None) -> None:
        """Switch the pods query to another namespace and refetch."""
        namespace = namespace or None
        if namespace == self.commands.namespace:
            return
        logger.info("Switching namespace to %s", namespace or "<context default>")
        self.poller.reset(ResourceClass.PODS)
        self.commands.namespace = namespace
        self.settings.namespace = namespace
        self.store.clear_snapshot(ResourceClass.PODS)
        if not self._torn_down:
            self.poller.poll(ResourceClass.PODS)

    @property
    def namespace(self) -> str | None:
        """Namespace in effect: the explicit one, else the context default."""
        if self.commands.namespace:
            return self.commands.namespace
        context = self.store.context()
        return context.namespace if context is not None else None

    def teardown(self) -> None:
        """Stop refreshing, cancel every process and drop session state."""
        self._torn_down = True
        self.orchestrator.teardown()
        self.mutations.cancel_all()
        self.store.set_change_callback(None)
        self.store.clear()

    # =========================================================================
    # One-shot queries
    # =========================================================================

    async def describe_pod(self, name: str) -> str:
        return await self.runner.run_once(self.commands.describe_pod(name))

    async def pod_logs(self, name: str, tail: int | None = None) -> str:
        lines = tail if tail is not None else self.settings.log_tail_lines
        return await self.runner.run_once(self.commands.pod_logs(name, tail=lines))

    def render_pod(self, name: str) -> Text | None:
        """Structural rendering of a pod's JSON, None if the pod is unknown."""
        pod = self.store.pod_raw(name)
        if pod is None:
            return None
        return self.renderer.render_text(pod)

    async def wait_for(self, resource_class: ResourceClass) -> Any:
        """Wait for the next fetch of a class; the value is also applied."""
        return await self.poller.wait_for(resource_class)

    async def check_connection(self) -> bool:
        try:
            await self.wait_for(ResourceClass.CONTEXT)
        except PodPilotError as exc:
            logger.warning("Cluster connection check failed: %s", exc)
            return False
        return True

    async def fetch_all(self) -> dict[str, Any]:
        context, pods = await asyncio.gather(
            self.wait_for(ResourceClass.CONTEXT),
            self.wait_for(ResourceClass.PODS),
        )
        return {ResourceClass.CONTEXT.value: context, ResourceClass.PODS.value: pods}

    def context(self) -> ContextInfo | None:
        return self.store.context()


__all__ = ["PodSession"]
