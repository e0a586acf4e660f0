"""Detail screens."""

from podpilot.screens.detail.text_detail_screen import TextDetailScreen

__all__ = ["TextDetailScreen"]
