"""Screens for PodPilot."""
