"""Settings persistence in a YAML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from podpilot.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads and saves AppSettings."""

    CONFIG_ENV_VAR = "PODPILOT_CONFIG"
    DEFAULT_PATH = Path("~/.config/podpilot/settings.yaml")

    @classmethod
    def config_path(cls) -> Path:
        override = os.environ.get(cls.CONFIG_ENV_VAR)
        return Path(override).expanduser() if override else cls.DEFAULT_PATH.expanduser()

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings, returning defaults when no file exists.

        Raises:
            ConfigLoadError: The file is unreadable or invalid.
        """
        config_path = path or cls.config_path()
        if not config_path.exists():
            return AppSettings()
        try:
            with open(config_path, encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read {config_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"{config_path} must contain a mapping")
        try:
            settings = AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {config_path}: {exc}") from exc
        logger.debug("Loaded settings from %s", config_path)
        return settings

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Write settings to disk.

        Raises:
            ConfigSaveError: The file cannot be written.
        """
        config_path = path or cls.config_path()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as handle:
                yaml.safe_dump(settings.model_dump(), handle, default_flow_style=False, sort_keys=False)
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {config_path}: {exc}") from exc
        return config_path


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
