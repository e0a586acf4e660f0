"""Scalar constants for the TUI.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "PodPilot"

# ============================================================================
# Placeholders
# ============================================================================

FETCHING_PLACEHOLDER: Final = "Fetching..."
FETCH_FAILED_PREFIX: Final = "Fetch failed"

# ============================================================================
# Rendering
# ============================================================================

DOCUMENT_START_MARKER: Final = "---"
LIST_MARKER: Final = "-"

# ============================================================================
# Styles (rich style strings)
# ============================================================================

STYLE_KEY: Final = "bold cyan"
STYLE_DIM: Final = "dim"
STYLE_WARNING: Final = "bold yellow"
STYLE_ERROR: Final = "bold red"
STYLE_HEADING: Final = "bold"
STYLE_MARKED: Final = "bold red"
STYLE_PENDING: Final = "dim strike"

__all__ = [
    "APP_TITLE",
    "DOCUMENT_START_MARKER",
    "FETCHING_PLACEHOLDER",
    "FETCH_FAILED_PREFIX",
    "LIST_MARKER",
    "STYLE_DIM",
    "STYLE_ERROR",
    "STYLE_HEADING",
    "STYLE_KEY",
    "STYLE_MARKED",
    "STYLE_PENDING",
    "STYLE_WARNING",
]
