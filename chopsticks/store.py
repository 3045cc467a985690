"""Persisted snippet document.

One TOML file holds a single ``snippets`` array. Loading a missing file
creates it (and its directory) empty; saving always rewrites the whole
document from the in-memory list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_data_dir

from .errors import SnippetLoadError, SnippetParseError, SnippetSaveError
from .snippet import Snippet, dump_snippets, load_snippets_text

logger = logging.getLogger(__name__)

APP_NAME = "chopsticks"
SNIPPETS_FILENAME = "snippets.toml"


def default_snippets_path() -> Path:
    """Return the per-user location of the snippet document."""
    return Path(user_data_dir(APP_NAME, appauthor=False)) / SNIPPETS_FILENAME


class SnippetStore:
    """Load/save contract for the snippet list."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else default_snippets_path()

    def load(self) -> list[Snippet]:
        """Read snippets, creating an empty document when none exists."""
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
                logger.info("Created empty snippet file %s", self.path)
                return []
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SnippetLoadError(self.path, str(exc)) from exc

        try:
            snippets = load_snippets_text(text)
        except SnippetParseError as exc:
            raise SnippetLoadError(self.path, str(exc)) from exc
        logger.info("Loaded %d snippets from %s", len(snippets), self.path)
        return snippets

    def save(self, snippets: list[Snippet]) -> None:
        """Overwrite the document with ``snippets``."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump_snippets(snippets), encoding="utf-8")
        except OSError as exc:
            raise SnippetSaveError(self.path, str(exc)) from exc
        logger.info("Saved %d snippets to %s", len(snippets), self.path)
