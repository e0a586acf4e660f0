"""Keyboard bindings module.

Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen-specific bindings (*_SCREEN_BINDINGS)
"""

from podpilot.keyboard.app import APP_BINDINGS
from podpilot.keyboard.navigation import (
    DETAIL_SCREEN_BINDINGS,
    PODS_SCREEN_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "DETAIL_SCREEN_BINDINGS",
    "PODS_SCREEN_BINDINGS",
]
