"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from podpilot.constants.defaults import (
    AUTO_REFRESH_DEFAULT,
    INDENT_WIDTH_DEFAULT,
    INLINE_THRESHOLD_DEFAULT,
    KUBECTL_PATH_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from podpilot.constants.limits import (
    INDENT_WIDTH_MIN,
    INLINE_THRESHOLD_MIN,
    LOG_TAIL_LINES_MIN,
    REFRESH_INTERVAL_MIN,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Cluster CLI
    kubectl_path: str = KUBECTL_PATH_DEFAULT
    context: str | None = None  # None = kubeconfig current-context
    namespace: str | None = None  # None = context default

    # Refresh
    refresh_interval: float = Field(default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN)  # seconds
    auto_refresh: bool = AUTO_REFRESH_DEFAULT

    # Structural rendering
    indent_width: int = Field(default=INDENT_WIDTH_DEFAULT, ge=INDENT_WIDTH_MIN)
    inline_threshold: int = Field(default=INLINE_THRESHOLD_DEFAULT, ge=INLINE_THRESHOLD_MIN)

    log_tail_lines: int = Field(default=LOG_TAIL_LINES_DEFAULT, ge=LOG_TAIL_LINES_MIN)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
