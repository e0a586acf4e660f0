"""PodPilot - interactive pod browser driven by kubectl."""

__version__ = "0.1.0"
