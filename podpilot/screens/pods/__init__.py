"""Pods screen and presenter."""

from podpilot.screens.pods.pods_screen import PodsScreen
from podpilot.screens.pods.presenter import (
    ContextRef,
    PodRef,
    PodsPresenter,
    ViewLine,
)

__all__ = [
    "ContextRef",
    "PodRef",
    "PodsPresenter",
    "PodsScreen",
    "ViewLine",
]
