"""Structural renderer - YAML-like text for arbitrary decoded JSON trees.

The renderer knows nothing about Kubernetes. It walks mappings, sequences and
scalars and lays them out with a fixed indentation per depth:

    ---
    metadata:
      name: web-0
    spec:
      containers:
        - image: nginx
          name: web

``render`` returns plain text; ``render_text`` returns the same layout as a
``rich.text.Text`` with mapping keys styled.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.text import Text

from podpilot.constants.defaults import INDENT_WIDTH_DEFAULT, INLINE_THRESHOLD_DEFAULT
from podpilot.constants.limits import INDENT_WIDTH_MIN
from podpilot.constants.values import DOCUMENT_START_MARKER, LIST_MARKER, STYLE_KEY

# One rendered line: (text, style) segments.
_Line = list[tuple[str, str | None]]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def scalar_text(value: Any) -> str:
    """Literal text form of a scalar."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


class StructuralRenderer:
    """Lays out hierarchical values as indented structured text."""

    def __init__(
        self,
        indent_width: int = INDENT_WIDTH_DEFAULT,
        inline_threshold: int = INLINE_THRESHOLD_DEFAULT,
        key_style: str | None = STYLE_KEY,
    ) -> None:
        if indent_width < INDENT_WIDTH_MIN:
            raise ValueError(f"indent_width must be at least {INDENT_WIDTH_MIN}")
        self.indent_width = indent_width
        self.inline_threshold = inline_threshold
        self.key_style = key_style

    def render(self, value: Any, depth: int = 0) -> str:
        return self.render_text(value, depth).plain

    def render_text(self, value: Any, depth: int = 0) -> Text:
        lines = self._render(value, depth)
        if depth == 0:
            lines.insert(0, [(DOCUMENT_START_MARKER, None)])

        text = Text()
        for index, line in enumerate(lines):
            if index:
                text.append("\n")
            for segment, style in line:
                text.append(segment, style)
        return text

    def _indent(self, depth: int) -> str:
        return " " * (depth * self.indent_width)

    def _render(self, value: Any, depth: int) -> list[_Line]:
        if isinstance(value, Mapping):
            return self._render_mapping(value, depth)
        if _is_sequence(value):
            return self._render_sequence(value, depth)
        return self._render_scalar_block(value, depth)

    def _render_scalar_block(self, value: Any, depth: int) -> list[_Line]:
        indent = self._indent(depth)
        return [[(indent + line, None)] for line in scalar_text(value).split("\n")]

    def _inlines(self, value: Any) -> bool:
        if not isinstance(value, str):
            return True
        return len(value) < self.inline_threshold and "\n" not in value

    def _render_mapping(self, value: Mapping[Any, Any], depth: int) -> list[_Line]:
        indent = self._indent(depth)
        if not value:
            return [[(indent + "{}", None)]]

        lines: list[_Line] = []
        for key, item in value.items():
            key_line: _Line = [(indent, None), (str(key), self.key_style), (":", None)]
            if isinstance(item, Mapping) or _is_sequence(item):
                if not item:
                    key_line.append((" {}" if isinstance(item, Mapping) else " []", None))
                    lines.append(key_line)
                    continue
                lines.append(key_line)
                lines.extend(self._render(item, depth + 1))
            elif self._inlines(item):
                literal = scalar_text(item)
                if literal:
                    key_line.append((" " + literal, None))
                lines.append(key_line)
            else:
                lines.append(key_line)
                lines.extend(self._render_scalar_block(item, depth + 1))
        return lines

    def _render_sequence(self, value: list[Any] | tuple[Any, ...], depth: int) -> list[_Line]:
        indent = self._indent(depth)
        if not value:
            return [[(indent + "[]", None)]]

        if len(value) == 1:
            lines = self._render(value[0], depth + 1)
            marker = indent + LIST_MARKER.ljust(self.indent_width)
            first_text, first_style = lines[0][0]
            lines[0] = [(marker + first_text[len(marker):], first_style), *lines[0][1:]]
            return lines

        lines = []
        for item in value:
            lines.append([(indent + LIST_MARKER, None)])
            lines.extend(self._render(item, depth + 1))
        return lines


def render(
    value: Any,
    depth: int = 0,
    *,
    indent_width: int = INDENT_WIDTH_DEFAULT,
    inline_threshold: int = INLINE_THRESHOLD_DEFAULT,
) -> str:
    """Render a decoded JSON tree as indented structured text."""
    return StructuralRenderer(indent_width, inline_threshold).render(value, depth)


def render_text(
    value: Any,
    depth: int = 0,
    *,
    indent_width: int = INDENT_WIDTH_DEFAULT,
    inline_threshold: int = INLINE_THRESHOLD_DEFAULT,
) -> Text:
    """Like ``render`` but returns rich Text with mapping keys styled."""
    return StructuralRenderer(indent_width, inline_threshold).render_text(value, depth)


__all__ = [
    "StructuralRenderer",
    "render",
    "render_text",
    "scalar_text",
]
