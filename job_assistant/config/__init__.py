"""Runtime configuration for the assistant (see settings.py)."""
