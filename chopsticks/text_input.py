"""Editable text buffer shared by the search bar and the snippet editor."""

from __future__ import annotations

TAB_SPACES = "    "


class TextInput:
    """Line buffer with a ``(row, col)`` cursor.

    ``multiline=False`` keeps the buffer to one line: newline-producing keys
    are ignored and pasted text is flattened.
    """

    def __init__(self, text: str = "", *, multiline: bool = False, placeholder: str = "") -> None:
        self.multiline = multiline
        self.placeholder = placeholder
        self.lines: list[str] = [""]
        self.row = 0
        self.col = 0
        self.set_text(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.row, self.col)

    def is_empty(self) -> bool:
        return self.lines == [""]

    def set_text(self, text: str) -> None:
        """Replace the buffer and move the cursor to its start."""
        if self.multiline:
            self.lines = text.split("\n")
        else:
            self.lines = [text.replace("\n", " ")]
        self.row = 0
        self.col = 0

    def insert(self, text: str) -> None:
        for ch in text:
            if ch == "\n":
                self._split_line()
            else:
                line = self.lines[self.row]
                self.lines[self.row] = line[: self.col] + ch + line[self.col :]
                self.col += 1

    def _split_line(self) -> None:
        if not self.multiline:
            return
        line = self.lines[self.row]
        self.lines[self.row] = line[: self.col]
        self.lines.insert(self.row + 1, line[self.col :])
        self.row += 1
        self.col = 0

    def backspace(self) -> bool:
        if self.col > 0:
            line = self.lines[self.row]
            self.lines[self.row] = line[: self.col - 1] + line[self.col :]
            self.col -= 1
            return True
        if self.row > 0:
            prev = self.lines[self.row - 1]
            self.lines[self.row - 1] = prev + self.lines.pop(self.row)
            self.row -= 1
            self.col = len(prev)
            return True
        return False

    def delete(self) -> bool:
        line = self.lines[self.row]
        if self.col < len(line):
            self.lines[self.row] = line[: self.col] + line[self.col + 1 :]
            return True
        if self.row + 1 < len(self.lines):
            self.lines[self.row] = line + self.lines.pop(self.row + 1)
            return True
        return False

    def clear_to_line_start(self) -> bool:
        if self.col == 0:
            return False
        self.lines[self.row] = self.lines[self.row][self.col :]
        self.col = 0
        return True

    def move_left(self) -> None:
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = len(self.lines[self.row])

    def move_right(self) -> None:
        if self.col < len(self.lines[self.row]):
            self.col += 1
        elif self.row + 1 < len(self.lines):
            self.row += 1
            self.col = 0

    def move_vertical(self, delta: int) -> None:
        self.row = max(0, min(len(self.lines) - 1, self.row + delta))
        self.col = min(self.col, len(self.lines[self.row]))

    def handle_key(self, key: str) -> bool:
        """Apply one key token, returning whether the buffer text changed."""
        if key == "BACKSPACE":
            return self.backspace()
        if key == "DELETE":
            return self.delete()
        if key == "CTRL_U":
            return self.clear_to_line_start()
        if key == "LEFT":
            self.move_left()
            return False
        if key == "RIGHT":
            self.move_right()
            return False
        if key == "HOME":
            self.col = 0
            return False
        if key == "END":
            self.col = len(self.lines[self.row])
            return False
        if self.multiline:
            if key == "UP":
                self.move_vertical(-1)
                return False
            if key == "DOWN":
                self.move_vertical(1)
                return False
            if key == "ENTER":
                self._split_line()
                return True
            if key == "TAB":
                self.insert(TAB_SPACES)
                return True
        if len(key) == 1 and key.isprintable():
            self.insert(key)
            return True
        return False
