"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Cluster CLI defaults
# ============================================================================

KUBECTL_PATH_DEFAULT: Final = "kubectl"
NAMESPACE_FALLBACK: Final = "default"

# ============================================================================
# Refresh defaults
# ============================================================================

REFRESH_INTERVAL_DEFAULT: Final = 5
AUTO_REFRESH_DEFAULT: Final = True

# ============================================================================
# Rendering defaults
# ============================================================================

INDENT_WIDTH_DEFAULT: Final = 2
INLINE_THRESHOLD_DEFAULT: Final = 60
LOG_TAIL_LINES_DEFAULT: Final = 200

__all__ = [
    "AUTO_REFRESH_DEFAULT",
    "INDENT_WIDTH_DEFAULT",
    "INLINE_THRESHOLD_DEFAULT",
    "KUBECTL_PATH_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "NAMESPACE_FALLBACK",
    "REFRESH_INTERVAL_DEFAULT",
]
