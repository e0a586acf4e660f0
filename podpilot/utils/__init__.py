"""Utility helpers for PodPilot."""

from podpilot.utils.json_output import decode_json_output
from podpilot.utils.structural_renderer import (
    StructuralRenderer,
    render,
    render_text,
)

__all__ = [
    "StructuralRenderer",
    "decode_json_output",
    "render",
    "render_text",
]
