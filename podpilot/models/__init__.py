"""Data models for PodPilot."""
