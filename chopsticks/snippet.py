"""Snippet record type and its TOML text form.

The same record syntax is used for the persisted document (one
``[[snippets]]`` table per entry) and for the editor buffer (bare
``key = value`` lines). Parsing goes through ``tomllib``; writing is a
small emitter limited to the three snippet fields.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass

from .errors import SnippetParseError

EDITOR_PLACEHOLDER = 'priority = 0\ncmd = "echo hello world"\ndescription = "this is a example"'


@dataclass
class Snippet:
    """One stored command.

    ``priority`` is the relevance score from the last search ranking. It is
    persisted for compatibility but never used as an identity.
    """

    cmd: str = ""
    description: str = ""
    priority: int = 0

    def content(self) -> tuple[str, str]:
        """Return the user-authored fields, ignoring the derived score."""
        return (self.cmd, self.description)


def _needs_basic_string(value: str) -> bool:
    if "'''" in value:
        return True
    for ch in value:
        if ch in "\t\n":
            continue
        if ord(ch) < 0x20 or ch == "\x7f":
            return True
    return False


def toml_string(value: str) -> str:
    """Encode ``value`` as a TOML string, preferring multi-line literals.

    Literal ``'''`` strings keep commands readable (no backslash escaping).
    A leading newline is written after the opening delimiter because TOML
    drops the first newline there. Values a literal string cannot hold fall
    back to an escaped basic string.
    """
    if _needs_basic_string(value):
        return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")
    if not value or value.startswith("\n"):
        return f"'''\n{value}'''"
    return f"'''{value}'''"


def format_snippet(snippet: Snippet) -> str:
    """Return the editable record text for ``snippet``."""
    return "\n".join(
        (
            f"priority = {int(snippet.priority)}",
            f"cmd = {toml_string(snippet.cmd)}",
            f"description = {toml_string(snippet.description)}",
        )
    )


def snippet_from_record(record: object) -> Snippet:
    """Validate one decoded TOML table and build a ``Snippet``.

    ``cmd`` and ``description`` are required strings; ``priority`` is an
    optional integer defaulting to ``0``. Unknown keys are ignored.
    """
    if not isinstance(record, dict):
        raise SnippetParseError("snippet must be a table")
    missing = [key for key in ("cmd", "description") if key not in record]
    if missing:
        raise SnippetParseError(f"missing field {missing[0]!r}")
    cmd = record["cmd"]
    description = record["description"]
    if not isinstance(cmd, str):
        raise SnippetParseError("'cmd' must be a string")
    if not isinstance(description, str):
        raise SnippetParseError("'description' must be a string")
    priority = record.get("priority", 0)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise SnippetParseError("'priority' must be an integer")
    return Snippet(cmd=cmd, description=description, priority=priority)


def parse_snippet(text: str) -> Snippet:
    """Parse editor text into a snippet, raising ``SnippetParseError``."""
    try:
        record = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise SnippetParseError(str(exc)) from exc
    return snippet_from_record(record)


def dump_snippets(snippets: list[Snippet]) -> str:
    """Serialize ``snippets`` as a document with one ``snippets`` array."""
    blocks = [f"[[snippets]]\n{format_snippet(snippet)}\n" for snippet in snippets]
    return "\n".join(blocks)


def load_snippets_text(text: str) -> list[Snippet]:
    """Parse a persisted document; empty text yields an empty list."""
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise SnippetParseError(str(exc)) from exc
    records = document.get("snippets", [])
    if not isinstance(records, list):
        raise SnippetParseError("'snippets' must be an array of tables")
    snippets: list[Snippet] = []
    for index, record in enumerate(records):
        try:
            snippets.append(snippet_from_record(record))
        except SnippetParseError as exc:
            raise SnippetParseError(f"snippet #{index + 1}: {exc}") from exc
    return snippets
