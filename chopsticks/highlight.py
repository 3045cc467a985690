"""Shell-command highlighting and terminal-safe text.

Commands are colored with Pygments' Bash lexer for the details pane. All
user text is passed through ``sanitize_terminal_text`` first so stored
control bytes never reach the terminal.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import BashLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
_LEXER = BashLexer(stripnl=False)
_FORMATTERS: dict[str, Terminal256Formatter] = {}


def sanitize_terminal_text(text: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(text) is None:
        return text

    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if ch in {"\n", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Return ``style`` if Pygments knows it, else the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=normalize_style(style))
        _FORMATTERS[style] = formatter
    return formatter


def highlight_command(cmd: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``cmd`` colored as shell source, with control bytes escaped."""
    source = sanitize_terminal_text(cmd)
    if not source:
        return source
    rendered = highlight(source, _LEXER, _formatter_for_style(style))
    # The lexer always terminates its output with a newline.
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
