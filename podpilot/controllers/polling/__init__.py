"""Polling and refresh coordination."""
