"""Exception types raised by tierlink."""

from __future__ import annotations


class TierlinkError(Exception):
    """Base class for tierlink errors."""


class ConfigError(TierlinkError):
    """The tier document is unreadable or structurally invalid.

    ``path`` names the first offending field, e.g.
    ``presets.openai.fast.model``; ``$`` stands for the document root.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class StateReadError(TierlinkError):
    """The override file exists but could not be read or decoded."""
