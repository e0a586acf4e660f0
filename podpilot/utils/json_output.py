"""Decoding of kubectl JSON output."""

from __future__ import annotations

import json
import logging
from typing import Any

from podpilot.constants.enums import ResourceClass
from podpilot.errors import ParseFailure

logger = logging.getLogger(__name__)


def decode_json_output(output: str, resource_class: ResourceClass | None = None) -> Any:
    """Decode a single JSON document from command output.

    Raises:
        ParseFailure: Output is empty or not valid JSON.
    """
    if not output.strip():
        raise ParseFailure("Command produced no output", resource_class)
    try:
        return json.loads(output)
    except json.JSONDecodeError as exc:
        logger.debug("Invalid JSON output for %s: %s", resource_class, exc)
        raise ParseFailure(f"Invalid JSON output: {exc.msg}", resource_class) from exc


__all__ = ["decode_json_output"]
