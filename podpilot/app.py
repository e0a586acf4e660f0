"""Main application class for PodPilot TUI."""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from podpilot.constants import APP_TITLE
from podpilot.keyboard.app import APP_BINDINGS
from podpilot.models.state.config_manager import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
)
from podpilot.screens.pods import PodsScreen

_HELP_TEXT = (
    "m: mark | u: unmark | U: unmark all | x: delete marked | g: refresh | "
    "enter: inspect | d: describe | l: logs | n: namespace | q: quit"
)


class PodPilotApp(App[None]):
    """Main TUI application for PodPilot."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    # Type hint for settings attribute
    settings: AppSettings

    def __init__(
        self,
        settings: AppSettings | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        if settings is None:
            settings = self._load_settings()
        self.settings = settings

    @staticmethod
    def _load_settings() -> AppSettings:
        """Load application settings from persistent storage."""
        try:
            return ConfigManager.load()
        except ConfigLoadError:
            # Use defaults if loading fails
            return AppSettings()

    def on_mount(self) -> None:
        self.push_screen(PodsScreen(self.settings))

    def action_show_help(self) -> None:
        self.notify(_HELP_TEXT, title="Keys", timeout=8)


__all__ = ["PodPilotApp"]
