"""Session state and settings models."""
