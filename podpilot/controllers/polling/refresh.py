"""Refresh orchestrator - one refresh pipeline for timer and manual triggers."""

from __future__ import annotations

import asyncio
import logging

from podpilot.constants.defaults import REFRESH_INTERVAL_DEFAULT
from podpilot.controllers.polling.poller import ResourcePoller

logger = logging.getLogger(__name__)


class RefreshOrchestrator:
    """Drives periodic and on-demand refresh cycles across resource classes.

    Deduplication is left to the poller: a refresh that overlaps a running one
    only starts queries for classes that are idle.
    """

    def __init__(
        self,
        poller: ResourcePoller,
        refresh_interval: float = REFRESH_INTERVAL_DEFAULT,
    ) -> None:
        self._poller = poller
        self.refresh_interval = refresh_interval
        self._timer: asyncio.Task[None] | None = None
        self._torn_down = False

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def refresh_all(self) -> None:
        """Poll every registered resource class."""
        if self._torn_down:
            logger.debug("Refresh after teardown ignored")
            return
        for resource_class in self._poller.resource_classes:
            self._poller.poll(resource_class)

    def start(self) -> None:
        """Refresh now and then every ``refresh_interval`` seconds."""
        self._torn_down = False
        self.stop()
        self._timer = asyncio.get_running_loop().create_task(
            self._tick(), name="podpilot-refresh-timer"
        )

    def stop(self) -> None:
        """Cancel the periodic timer; in-flight queries keep running."""
        timer, self._timer = self._timer, None
        if timer is not None and not timer.done():
            timer.cancel()

    async def _tick(self) -> None:
        while True:
            self.refresh_all()
            await asyncio.sleep(self.refresh_interval)

    def teardown(self) -> None:
        """Stop the timer and reset every resource class. Idempotent."""
        self._torn_down = True
        self.stop()
        self._poller.reset_all()


__all__ = ["RefreshOrchestrator"]
