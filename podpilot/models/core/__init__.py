"""Core projection models."""

from podpilot.models.core.context_info import ContextInfo
from podpilot.models.core.pod_info import PodInfo

__all__ = ["ContextInfo", "PodInfo"]
