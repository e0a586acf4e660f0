"""Modal dialogs for the TUI application.

Dialogs are modal screens that dismiss with their result, so callers pass a
callback to ``push_screen``.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

_DIALOG_CSS = """
{name} {{
    align: center middle;
}}

{name} .dialog-container {{
    width: 60;
    height: auto;
    padding: 1 2;
    border: round $accent;
    background: $surface;
}}

{name} .dialog-title {{
    text-style: bold;
    margin-bottom: 1;
}}

{name} .dialog-buttons {{
    height: auto;
    align: right middle;
    margin-top: 1;
}}
"""


class ConfirmDialog(ModalScreen[bool]):
    """Confirmation dialog with OK/Cancel buttons."""

    DEFAULT_CSS = _DIALOG_CSS.format(name="ConfirmDialog")
    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("escape,n", "cancel", "No"),
    ]

    def __init__(self, message: str, title: str = "Confirm") -> None:
        super().__init__()
        self._message = message
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message")
            with Horizontal(classes="dialog-buttons"):
                yield Button("OK", id="confirm-btn", variant="error")
                yield Button("Cancel", id="cancel-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-btn")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class InputDialog(ModalScreen[str | None]):
    """Single-line prompt. Dismisses with the entered text, or None."""

    DEFAULT_CSS = _DIALOG_CSS.format(name="InputDialog")
    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, title: str, value: str = "", placeholder: str = "") -> None:
        super().__init__()
        self._title = title
        self._value = value
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            yield Static(self._title, classes="dialog-title")
            yield Input(value=self._value, placeholder=self._placeholder, id="dialog-input")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "ConfirmDialog",
    "InputDialog",
]
