"""Exception types raised across chopsticks.

Only the top-level driver decides whether an error is recoverable; everything
below it raises one of these and lets it propagate.
"""

from __future__ import annotations

from pathlib import Path


class ChopsticksError(Exception):
    """Base class for expected, user-reportable failures."""


class SnippetParseError(ChopsticksError):
    """Structured snippet text could not be turned into a snippet record."""


class SnippetLoadError(ChopsticksError):
    """The persisted snippet document is unreadable or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot load snippets from {path}: {reason}")
        self.path = path
        self.reason = reason


class SnippetSaveError(ChopsticksError):
    """The persisted snippet document could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot save snippets to {path}: {reason}")
        self.path = path
        self.reason = reason


class CommandLaunchError(ChopsticksError):
    """A snippet command could not be spawned."""
