"""Base controller."""

from podpilot.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
