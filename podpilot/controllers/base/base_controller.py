"""Base controller for PodPilot sessions.

Controllers own the non-blocking data flow between kubectl and the screens:
queries run as asyncio subprocesses and results arrive through callbacks,
so the Textual event loop is never blocked.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseController(ABC):
    """Base controller class for cluster-backed sessions.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    @abstractmethod
    async def fetch_all(self) -> dict[str, Any]:
        """Fetch all data from the source.

        Returns:
            Dictionary containing all fetched data
        """
        ...

    @abstractmethod
    def teardown(self) -> None:
        """Release processes and timers. Must be idempotent."""
        ...
