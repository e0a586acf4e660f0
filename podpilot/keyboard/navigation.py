"""Screen-specific keyboard bindings."""

from textual.binding import Binding

# ============================================================================
# Pods screen
# ============================================================================

PODS_SCREEN_BINDINGS: list[Binding] = [
    Binding("m", "mark", "Mark"),
    Binding("u", "unmark", "Unmark"),
    Binding("U", "unmark_all", "Unmark all"),
    Binding("x", "execute_marks", "Execute"),
    Binding("g", "refresh", "Refresh"),
    Binding("d", "describe", "Describe"),
    Binding("l", "logs", "Logs"),
    Binding("n", "set_namespace", "Namespace"),
]

# ============================================================================
# Detail screens
# ============================================================================

DETAIL_SCREEN_BINDINGS: list[Binding] = [
    Binding("escape", "app.pop_screen", "Back", priority=True),
]

__all__ = [
    "DETAIL_SCREEN_BINDINGS",
    "PODS_SCREEN_BINDINGS",
]
