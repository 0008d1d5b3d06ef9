"""AI-assisted task list with priority and sub-task suggestions."""

__version__ = "0.1.0"
