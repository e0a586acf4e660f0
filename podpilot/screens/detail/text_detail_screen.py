"""Scrollable read-only view for rendered pods, describe output and logs."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from podpilot.keyboard import DETAIL_SCREEN_BINDINGS


class TextDetailScreen(Screen[None]):
    """Shows one block of text under a title."""

    BINDINGS = DETAIL_SCREEN_BINDINGS
    DEFAULT_CSS = """
    TextDetailScreen #detail-body {
        padding: 0 1;
    }
    """

    def __init__(self, title: str, body: Text | str) -> None:
        super().__init__()
        self.detail_title = title
        self.body = body if isinstance(body, Text) else Text(body)

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="detail-scroll"):
            yield Static(self.body, id="detail-body")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.detail_title
