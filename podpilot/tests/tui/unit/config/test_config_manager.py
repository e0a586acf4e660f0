"""Unit tests for AppSettings and ConfigManager."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from podpilot.models.state.config_manager import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)


class TestAppSettings:
    """Tests for settings validation."""

    def test_defaults(self) -> None:
        settings = AppSettings()

        assert settings.kubectl_path == "kubectl"
        assert settings.context is None
        assert settings.namespace is None
        assert settings.refresh_interval == 5
        assert settings.auto_refresh is True
        assert settings.indent_width == 2
        assert settings.inline_threshold == 60
        assert settings.log_tail_lines == 200

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("refresh_interval", 0),
            ("indent_width", 1),
            ("inline_threshold", 0),
            ("log_tail_lines", 0),
        ],
    )
    def test_lower_bounds(self, field, value) -> None:
        with pytest.raises(ValidationError):
            AppSettings(**{field: value})

    def test_assignment_is_validated(self) -> None:
        settings = AppSettings()

        with pytest.raises(ValidationError):
            settings.indent_width = 0


class TestConfigManager:
    """Tests for YAML persistence."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert ConfigManager.load(tmp_path / "absent.yaml") == AppSettings()

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.yaml"
        settings = AppSettings(context="prod", namespace="web", refresh_interval=10)

        assert ConfigManager.save(settings, path) == path
        assert ConfigManager.load(path) == settings

    def test_partial_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("namespace: kube-system\n", encoding="utf-8")

        settings = ConfigManager.load(path)

        assert settings.namespace == "kube-system"
        assert settings.refresh_interval == 5

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")

        assert ConfigManager.load(path) == AppSettings()

    @pytest.mark.parametrize(
        "content",
        [
            "refresh_interval: 0\n",
            "- a\n- b\n",
            "namespace: [unclosed\n",
        ],
    )
    def test_invalid_file(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            ConfigManager.load(path)

    def test_saved_file_is_plain_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        ConfigManager.save(AppSettings(namespace="web"), path)

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["namespace"] == "web"

    def test_save_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(ConfigSaveError):
            ConfigManager.save(AppSettings(), blocker / "settings.yaml")

    def test_env_var_overrides_path(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "custom.yaml"
        monkeypatch.setenv(ConfigManager.CONFIG_ENV_VAR, str(path))

        assert ConfigManager.config_path() == path

    def test_default_path(self, monkeypatch) -> None:
        monkeypatch.delenv(ConfigManager.CONFIG_ENV_VAR, raising=False)

        assert ConfigManager.config_path().name == "settings.yaml"
        assert ConfigManager.config_path().parent.name == "podpilot"
