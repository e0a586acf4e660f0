"""Widgets for PodPilot."""

from podpilot.widgets.dialogs import ConfirmDialog, InputDialog

__all__ = ["ConfirmDialog", "InputDialog"]
