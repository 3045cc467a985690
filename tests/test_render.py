"""Frame composition tests.

Checks row counts and widths, placeholder screens, the selection marker,
editor ghost text, and the bottom status line.
"""

from __future__ import annotations

import unittest
from unittest import mock

from chopsticks.ansi import ANSI_ESCAPE_RE, display_width, fit_ansi_line
from chopsticks.app import App, AppServices, Msg, EDIT_OPEN
from chopsticks.render import (
    CURSOR_SGR,
    NO_SELECTION_TEXT,
    SELECTED_MARKER,
    box_rows,
    build_frame,
    list_column_width,
    status_line,
    text_input_rows,
)
from chopsticks.snippet import Snippet
from chopsticks.text_input import TextInput


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def _app(snippets: list[Snippet]) -> App:
    services = AppServices(**{name: mock.Mock() for name in AppServices.__dataclass_fields__})
    return App(snippets, services)


def _sample() -> list[Snippet]:
    return [
        Snippet(cmd="git status", description="show working tree"),
        Snippet(cmd="docker ps\n--all", description="containers"),
    ]


class BuildFrameTests(unittest.TestCase):
    def test_frame_always_has_exactly_height_rows(self) -> None:
        for width, height in ((80, 24), (30, 5), (10, 2), (1, 1), (50, 3)):
            for snippets in ([], _sample()):
                rows = build_frame(_app(snippets), width, height)
                self.assertEqual(len(rows), height, (width, height))

    def test_body_rows_fill_the_terminal_width(self) -> None:
        rows = build_frame(_app(_sample()), 100, 20)

        for row in rows[:-1]:
            self.assertEqual(display_width(row), 100)
        self.assertEqual(display_width(rows[-1]), 99)

    def test_empty_list_shows_add_hint_and_details_placeholder(self) -> None:
        screen = _plain("\n".join(build_frame(_app([]), 160, 30)))

        self.assertIn("Empty", screen)
        self.assertIn("Ctrl-A", screen)
        self.assertIn(NO_SELECTION_TEXT.split(".")[0], screen)

    def test_selected_row_carries_marker_and_details_show_fields(self) -> None:
        app = _app(_sample())
        app.selected = 1

        rows = [_plain(row) for row in build_frame(app, 120, 20)]
        marked = [row for row in rows if SELECTED_MARKER in row]

        self.assertEqual(len(marked), 1)
        self.assertIn("01 docker ps", marked[0])
        self.assertNotIn("--all", marked[0].split("│")[1])
        screen = "\n".join(rows)
        self.assertIn("00 git status", screen)
        self.assertIn("[Command]", screen)
        self.assertIn("[Description]", screen)
        self.assertIn("containers", screen)

    def test_details_command_is_highlighted_only_with_a_style(self) -> None:
        app = _app([Snippet(cmd='echo "hi"', description="greet")])

        colored = build_frame(app, 100, 12, style="monokai")
        plain = build_frame(app, 100, 12)

        self.assertNotEqual(colored, plain)
        self.assertEqual([_plain(row) for row in colored], [_plain(row) for row in plain])
        self.assertIn('echo "hi"', _plain("\n".join(plain)))

    def test_control_bytes_in_snippets_are_escaped(self) -> None:
        app = _app([Snippet(cmd="echo \x1b[2J", description="bell\x07")])

        screen = _plain("\n".join(build_frame(app, 100, 12)))

        self.assertIn("echo \\x1b[2J", screen)
        self.assertIn("bell\\x07", screen)
        self.assertNotIn("\x07", screen)

    def test_editor_shows_ghost_text_when_buffer_is_empty(self) -> None:
        app = _app([])
        app.update(Msg(EDIT_OPEN, snippet=Snippet()))
        app.editor.set_text("")

        screen = _plain("\n".join(build_frame(app, 80, 12)))

        self.assertIn("Edit snippet", screen)
        self.assertIn('cmd = "echo hello world"', screen)
        self.assertNotIn("Search", screen)

    def test_editor_shows_buffer_text(self) -> None:
        app = _app([])
        app.update(Msg(EDIT_OPEN, snippet=Snippet(cmd="ls", description="list")))

        screen = _plain("\n".join(build_frame(app, 80, 12)))

        self.assertIn("cmd = '''ls'''", screen)
        self.assertNotIn("echo hello world", screen)


class StatusLineTests(unittest.TestCase):
    def test_error_replaces_hints(self) -> None:
        app = _app(_sample())
        app.error_msg = "Invalid snippet: boom"

        line = _plain(status_line(app, 60))

        self.assertIn("Invalid snippet: boom", line)
        self.assertNotIn("run", line)

    def test_status_message_shown_without_error(self) -> None:
        app = _app(_sample())
        app.status_message = "Copied to clipboard"

        self.assertIn("Copied to clipboard", _plain(status_line(app, 60)))

    def test_hints_follow_mode(self) -> None:
        app = _app(_sample())
        self.assertIn("run", _plain(status_line(app, 120)))

        app.update(Msg(EDIT_OPEN, snippet=Snippet()))
        line = _plain(status_line(app, 120))
        self.assertIn("save", line)
        self.assertNotIn("run", line)


class TextInputRowsTests(unittest.TestCase):
    def test_wide_characters_keep_cursor_visible(self) -> None:
        widget = TextInput()
        widget.insert("界" * 10)

        rows = text_input_rows(widget, 6, 1)
        shown = fit_ansi_line(rows[0], 6)

        self.assertIn(CURSOR_SGR, shown)
        self.assertEqual(_plain(shown), "界界  ")

    def test_cursor_in_middle_of_wide_text_stays_visible(self) -> None:
        widget = TextInput()
        widget.insert("ab界界界界cd")
        for _ in range(4):
            widget.move_left()

        shown = fit_ansi_line(text_input_rows(widget, 5, 1)[0], 5)

        self.assertIn(f"{CURSOR_SGR}界", shown)

    def test_ascii_scrolls_to_show_cursor_at_right_edge(self) -> None:
        widget = TextInput()
        widget.insert("abcdefgh")

        self.assertEqual(_plain(text_input_rows(widget, 4, 1)[0]), "fgh ")


class LayoutHelperTests(unittest.TestCase):
    def test_list_column_width_respects_percent_and_minimums(self) -> None:
        self.assertEqual(list_column_width(100, 50.0), 50)
        self.assertEqual(list_column_width(100, 10.0), 20)
        self.assertEqual(list_column_width(100, 90.0), 80)
        self.assertEqual(list_column_width(30, 90.0), 15)

    def test_box_rows_draw_rounded_border_with_title(self) -> None:
        rows = [_plain(row) for row in box_rows(["hi"], 12, 4, title="Box")]

        self.assertEqual(len(rows), 4)
        self.assertTrue(rows[0].startswith("╭ Box "))
        self.assertTrue(rows[0].endswith("╮"))
        self.assertEqual(rows[1], "│ hi       │")
        self.assertTrue(rows[-1].startswith("╰") and rows[-1].endswith("╯"))
        self.assertTrue(all(len(row) == 12 for row in rows))


if __name__ == "__main__":
    unittest.main()
