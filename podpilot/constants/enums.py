"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Resource Enums
# =============================================================================

class ResourceClass(Enum):
    """Pollable cluster resource categories.

    Each member owns exactly one fetch operation and one in-flight slot.
    """

    PODS = "pods"
    CONTEXT = "context"


class PodPhase(Enum):
    """Pod phase values from Kubernetes API."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


# =============================================================================
# Fetch State Enums
# =============================================================================

class FetchState(Enum):
    """Data fetch state values."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


__all__ = [
    "FetchState",
    "PodPhase",
    "ResourceClass",
]
