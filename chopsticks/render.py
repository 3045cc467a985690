"""Rendering engine for the search/list/details and editor screens.

``build_frame`` is a pure projection of the application state onto screen
rows; ``render_frame`` writes a composed frame to the terminal in one call.
"""

from __future__ import annotations

import os

from .ansi import RESET, char_display_width, fit_ansi_line, wrap_ansi_text, wrap_plain_text
from .app import App
from .highlight import highlight_command, sanitize_terminal_text
from .text_input import TextInput

BORDER_SGR = "\033[38;5;45m"
TITLE_SGR = "\033[1;38;5;81m"
HEADING_SGR = "\033[1;36m"
SELECTED_SGR = "\033[1;3;36m"
PLACEHOLDER_SGR = "\033[2;38;5;245m"
CURSOR_SGR = "\033[7m"
ERROR_SGR = "\033[31m"
STATUS_SGR = "\033[32m"
KEY_SGR = "\033[1;97;46m"
HINT_SGR = "\033[97;100m"
SELECTED_MARKER = "🥢"
MIN_LIST_WIDTH = 20
SEARCH_BOX_ROWS = 3

EMPTY_LIST_TEXT = "Empty ＞︿＜. Press `Ctrl-A` to add a new snippet ヾ(•ω•`)o"
NO_SELECTION_TEXT = "There's nothing. Let's select one, and the details will be displayed here OwO."

BROWSE_HINTS: tuple[tuple[str, str], ...] = (
    ("Enter", "run"),
    ("^A", "add"),
    ("^E", "edit"),
    ("^R", "remove"),
    ("^Y", "copy"),
    ("Esc/^C", "quit"),
)
EDIT_HINTS: tuple[tuple[str, str], ...] = (
    ("^S", "save"),
    ("^C", "cancel"),
)


def box_rows(inner: list[str], width: int, height: int, title: str = "", padding: int = 1) -> list[str]:
    """Draw a rounded frame of ``width`` x ``height`` around ``inner`` rows."""
    if width < 2 or height < 2:
        return [" " * max(0, width) for _ in range(max(0, height))]
    inner_w = width - 2
    left_pad = min(padding, inner_w)
    content_w = max(0, inner_w - 2 * padding)
    right_pad = inner_w - left_pad - content_w
    top_label = f" {title} " if title and len(title) + 2 <= inner_w else ""
    top = (
        f"{BORDER_SGR}╭{RESET}{TITLE_SGR}{top_label}{RESET}"
        f"{BORDER_SGR}{'─' * (inner_w - len(top_label))}╮{RESET}"
    )
    rows = [top]
    side = f"{BORDER_SGR}│{RESET}"
    for idx in range(height - 2):
        text = inner[idx] if idx < len(inner) else ""
        rows.append(f"{side}{' ' * left_pad}{fit_ansi_line(text, content_w)}{' ' * right_pad}{side}")
    rows.append(f"{BORDER_SGR}╰{'─' * inner_w}╯{RESET}")
    return rows


def centered_message_rows(text: str, width: int, height: int) -> list[str]:
    wrapped = wrap_plain_text(text, width)
    top = max(0, (height - len(wrapped)) // 2)
    rows = [""] * top
    for line in wrapped:
        indent = max(0, (width - len(line)) // 2)
        rows.append(f"\033[1m{' ' * indent}{line}{RESET}")
    return rows


def _with_cursor(line: str, col: int) -> str:
    cursor_ch = line[col] if col < len(line) else " "
    return f"{line[:col]}{CURSOR_SGR}{cursor_ch}{RESET}{line[col + 1 :]}"


def _scroll_start(line: str, col: int, width: int) -> int:
    """Leftmost character index that keeps the cursor cell within ``width`` columns."""
    used = char_display_width(line[col], 0) if col < len(line) else 1
    start = col
    while start > 0:
        step = char_display_width(line[start - 1], 0)
        if used + step > width:
            break
        used += step
        start -= 1
    return start


def text_input_rows(widget: TextInput, width: int, height: int, show_cursor: bool = True) -> list[str]:
    """Project a text input into at most ``height`` rows scrolled to its cursor."""
    if width <= 0 or height <= 0:
        return []
    if widget.is_empty() and widget.placeholder:
        ghost = widget.placeholder.split("\n")[:height]
        rows = [f"{PLACEHOLDER_SGR}{line}{RESET}" for line in ghost]
        if show_cursor:
            first = ghost[0]
            rows[0] = f"{CURSOR_SGR}{first[:1] or ' '}{RESET}{PLACEHOLDER_SGR}{first[1:]}{RESET}"
        return rows

    row, col = widget.cursor
    first_row = max(0, row - height + 1)
    first_col = _scroll_start(widget.lines[row], col, width)
    rows: list[str] = []
    for idx in range(first_row, min(len(widget.lines), first_row + height)):
        line = widget.lines[idx]
        if show_cursor and idx == row:
            rows.append(_with_cursor(line[first_col:], col - first_col))
        else:
            rows.append(line[first_col:])
    return rows


def list_rows(app: App, width: int, height: int) -> list[str]:
    if not app.snippets:
        return centered_message_rows(EMPTY_LIST_TEXT, width, height)
    selected = app.selected if app.selected is not None else 0
    start = max(0, selected - height + 1)
    rows: list[str] = []
    for index in range(start, min(len(app.snippets), start + height)):
        cmd_lines = app.snippets[index].cmd.splitlines()
        label = f"{index:02} {sanitize_terminal_text(cmd_lines[0]) if cmd_lines else ''}"
        if index == app.selected:
            rows.append(f"{SELECTED_MARKER}{SELECTED_SGR}{label}{RESET}")
        else:
            rows.append(f"  {label}")
    return rows


def details_rows(app: App, width: int, height: int, style: str | None = None) -> list[str]:
    """Show the selected command and description; ``style=None`` disables color."""
    snippet = app.selected_snippet()
    if snippet is None:
        return centered_message_rows(NO_SELECTION_TEXT, width, height)
    rows = [f"{HEADING_SGR}[Command]{RESET}"]
    if style is None:
        rows.extend(wrap_plain_text(sanitize_terminal_text(snippet.cmd), width))
    else:
        rows.extend(wrap_ansi_text(highlight_command(snippet.cmd, style), width))
    rows.append(f"{HEADING_SGR}[Description]{RESET}")
    rows.extend(wrap_plain_text(sanitize_terminal_text(snippet.description), width))
    return rows[:height]


def status_line(app: App, width: int) -> str:
    if app.error_msg:
        return fit_ansi_line(f" {ERROR_SGR}{app.error_msg}{RESET}", width)
    if app.status_message:
        return fit_ansi_line(f" {STATUS_SGR}{app.status_message}{RESET}", width)
    hints = EDIT_HINTS if app.is_editing else BROWSE_HINTS
    parts = [f"{KEY_SGR}{key}{RESET} {HINT_SGR}{label}{RESET}" for key, label in hints]
    return fit_ansi_line(" " + "  ".join(parts), width)


def list_column_width(width: int, percent: float) -> int:
    if width <= MIN_LIST_WIDTH * 2:
        return max(1, width // 2)
    left = int(width * percent / 100.0)
    return max(MIN_LIST_WIDTH, min(width - MIN_LIST_WIDTH, left))


def build_frame(app: App, width: int, height: int, style: str | None = None) -> list[str]:
    """Return exactly ``height`` rows describing the screen for ``app``."""
    width = max(1, width)
    height = max(1, height)
    body_h = height - 1
    body: list[str] = []
    if body_h > 0 and app.is_editing and app.editor is not None:
        editor_inner = text_input_rows(app.editor, max(0, width - 4), max(0, body_h - 2))
        body = box_rows(editor_inner, width, body_h, title="Edit snippet")
    elif body_h > 0:
        left_w = list_column_width(width, app.list_pane_percent)
        right_w = width - left_w
        search_h = min(SEARCH_BOX_ROWS, body_h)
        list_h = body_h - search_h
        left = box_rows(
            text_input_rows(app.search_bar, max(0, left_w - 6), 1),
            left_w,
            search_h,
            title="Search",
            padding=2,
        )
        left += box_rows(list_rows(app, max(0, left_w - 4), max(0, list_h - 2)), left_w, list_h, title="Snippets")
        right = box_rows(
            details_rows(app, max(0, right_w - 6), max(0, body_h - 2), style),
            right_w,
            body_h,
            title="Details",
            padding=2,
        )
        body = [f"{l_row}{r_row}" for l_row, r_row in zip(left, right)]
    return body[:body_h] + [status_line(app, width - 1)]


def render_frame(app: App, width: int, height: int, stdout_fd: int, style: str | None = None) -> None:
    """Write one full frame to ``stdout_fd``."""
    out: list[str] = ["\033[H\033[J"]
    for row, text in enumerate(build_frame(app, width, height, style)):
        out.append(f"\033[{row + 1};1H")
        out.append(text)
    out.append(RESET)
    os.write(stdout_fd, "".join(out).encode("utf-8", errors="replace"))
