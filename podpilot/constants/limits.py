"""Limit and threshold constants for the TUI.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 1
INDENT_WIDTH_MIN: Final = 2
INLINE_THRESHOLD_MIN: Final = 1
LOG_TAIL_LINES_MIN: Final = 1

# ============================================================================
# Display limits
# ============================================================================

ERROR_MESSAGE_MAX_LENGTH: Final = 160

__all__ = [
    "ERROR_MESSAGE_MAX_LENGTH",
    "INDENT_WIDTH_MIN",
    "INLINE_THRESHOLD_MIN",
    "LOG_TAIL_LINES_MIN",
    "REFRESH_INTERVAL_MIN",
]
