"""Smoke tests for the modal dialogs."""

from __future__ import annotations

import pytest
from textual.app import App

from podpilot.widgets import ConfirmDialog, InputDialog


class DialogHostApp(App[None]):
    """App that records the result of one dialog."""

    def __init__(self, dialog) -> None:
        super().__init__()
        self.dialog = dialog
        self.results: list[object] = []

    def on_mount(self) -> None:
        self.push_screen(self.dialog, self.results.append)


class TestConfirmDialog:
    """Test ConfirmDialog results."""

    @pytest.mark.asyncio
    async def test_y_confirms(self) -> None:
        """Test that 'y' dismisses with True."""
        app = DialogHostApp(ConfirmDialog("Delete 1 pod(s)?"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
        assert app.results == [True]

    @pytest.mark.asyncio
    async def test_escape_cancels(self) -> None:
        """Test that escape dismisses with False."""
        app = DialogHostApp(ConfirmDialog("Delete 1 pod(s)?"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
        assert app.results == [False]


class TestInputDialog:
    """Test InputDialog results."""

    @pytest.mark.asyncio
    async def test_submit_returns_stripped_text(self) -> None:
        """Test that enter dismisses with the typed value."""
        app = DialogHostApp(InputDialog("Namespace"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("k", "u", "b", "e", "space", "enter")
            await pilot.pause()
        assert app.results == ["kube"]

    @pytest.mark.asyncio
    async def test_escape_returns_none(self) -> None:
        """Test that escape dismisses with None."""
        app = DialogHostApp(InputDialog("Namespace", value="apps"))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
        assert app.results == [None]
