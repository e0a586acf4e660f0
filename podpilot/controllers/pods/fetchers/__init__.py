"""Fetch operations for the polled resource classes."""

from podpilot.controllers.pods.fetchers.context_fetcher import ContextFetcher
from podpilot.controllers.pods.fetchers.pod_fetcher import PodFetcher

__all__ = ["ContextFetcher", "PodFetcher"]
