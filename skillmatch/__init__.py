"""AI evaluation core for skill-challenge submissions."""

__version__ = "0.1.0"
