"""Constants module for PodPilot TUI.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, styles with Final)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in podpilot.keyboard module.
"""

from podpilot.constants.defaults import (
    AUTO_REFRESH_DEFAULT,
    INDENT_WIDTH_DEFAULT,
    INLINE_THRESHOLD_DEFAULT,
    KUBECTL_PATH_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    NAMESPACE_FALLBACK,
    REFRESH_INTERVAL_DEFAULT,
)
from podpilot.constants.enums import FetchState, PodPhase, ResourceClass
from podpilot.constants.limits import (
    ERROR_MESSAGE_MAX_LENGTH,
    INDENT_WIDTH_MIN,
    INLINE_THRESHOLD_MIN,
    LOG_TAIL_LINES_MIN,
    REFRESH_INTERVAL_MIN,
)
from podpilot.constants.values import (
    APP_TITLE,
    DOCUMENT_START_MARKER,
    FETCH_FAILED_PREFIX,
    FETCHING_PLACEHOLDER,
    LIST_MARKER,
)

__all__ = [
    "APP_TITLE",
    "AUTO_REFRESH_DEFAULT",
    "DOCUMENT_START_MARKER",
    "ERROR_MESSAGE_MAX_LENGTH",
    "FETCHING_PLACEHOLDER",
    "FETCH_FAILED_PREFIX",
    "INDENT_WIDTH_DEFAULT",
    "INDENT_WIDTH_MIN",
    "INLINE_THRESHOLD_DEFAULT",
    "INLINE_THRESHOLD_MIN",
    "KUBECTL_PATH_DEFAULT",
    "LIST_MARKER",
    "LOG_TAIL_LINES_DEFAULT",
    "LOG_TAIL_LINES_MIN",
    "NAMESPACE_FALLBACK",
    "REFRESH_INTERVAL_DEFAULT",
    "REFRESH_INTERVAL_MIN",
    "FetchState",
    "PodPhase",
    "ResourceClass",
]
