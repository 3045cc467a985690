"""Application model and its update step.

``App`` owns every piece of mutable state: the snippet list, the selection,
the search bar and editor buffers, the current mode, and the quit and
terminal-restored flags. Events are first translated into ``Msg`` values by
``handle_event`` and then applied by ``update``; rendering only reads.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .errors import SnippetParseError
from .events import Event
from .keys import KeyBinding, KeyRegistry
from .runner import CommandOutcome
from .search import rank_snippets
from .snippet import EDITOR_PLACEHOLDER, Snippet, format_snippet, parse_snippet
from .text_input import TextInput

logger = logging.getLogger(__name__)

MODE_BROWSE = "browse"
MODE_EDITING = "editing"

STATUS_MESSAGE_SECONDS = 1.5
LIST_PANE_STEP_PERCENT = 5.0

APP_CLOSE = "app_close"
SELECT_NEXT = "select_next"
SELECT_PREV = "select_prev"
EXECUTE_CMD = "execute_cmd"
COPY_TO_CLIPBOARD = "copy_to_clipboard"
REMOVE_SNIPPET = "remove_snippet"
RESIZE_LIST = "resize_list"
EDIT_OPEN = "edit_open"
EDIT_SAVE = "edit_save"
EDIT_CANCEL = "edit_cancel"


@dataclass(frozen=True)
class Msg:
    """One state transition request.

    ``snippet`` seeds the editor for ``EDIT_OPEN``; ``index`` names the list
    entry being edited (``None`` when adding). ``delta`` is the percentage
    step for ``RESIZE_LIST``.
    """

    action: str
    snippet: Snippet | None = None
    index: int | None = None
    delta: float = 0.0


@dataclass(frozen=True)
class AppServices:
    """Side-effecting collaborators injected into ``App``."""

    save_snippets: Callable[[list[Snippet]], None]
    release_terminal: Callable[[], None]
    stop_events: Callable[[], None]
    run_command: Callable[[str], CommandOutcome]
    report: Callable[[str], None]
    copy_text: Callable[[str], bool]
    save_list_pane_percent: Callable[[float], None]


class App:
    """Browse/Editing state machine over an owned snippet list."""

    def __init__(
        self,
        snippets: list[Snippet],
        services: AppServices,
        *,
        list_pane_percent: float = 50.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.services = services
        self.clock = clock
        self.snippets: list[Snippet] = list(snippets)
        self.selected: int | None = 0 if self.snippets else None
        self.mode = MODE_BROWSE
        self.quit_requested = False
        self.terminal_restored = False
        self.error_msg: str | None = None
        self.status_message = ""
        self.status_message_until = 0.0
        self.list_pane_percent = list_pane_percent
        self.search_bar = TextInput(placeholder="type to search snippets")
        self.editor: TextInput | None = None
        self.editing_original: tuple[int, Snippet] | None = None
        self.dirty = True

        self._browse_keys: KeyRegistry[Msg] = KeyRegistry[Msg]().register(
            KeyBinding(("ESC", "CTRL_C"), lambda: Msg(APP_CLOSE)),
            KeyBinding(("UP",), lambda: Msg(SELECT_PREV)),
            KeyBinding(("DOWN",), lambda: Msg(SELECT_NEXT)),
            KeyBinding(("ENTER",), lambda: Msg(EXECUTE_CMD)),
            KeyBinding(("CTRL_Y",), lambda: Msg(COPY_TO_CLIPBOARD)),
            KeyBinding(("CTRL_A",), lambda: Msg(EDIT_OPEN, snippet=Snippet())),
            KeyBinding(("CTRL_E",), self._edit_selected_msg),
            KeyBinding(("CTRL_R",), lambda: Msg(REMOVE_SNIPPET)),
            KeyBinding(("SHIFT_LEFT",), lambda: Msg(RESIZE_LIST, delta=-LIST_PANE_STEP_PERCENT)),
            KeyBinding(("SHIFT_RIGHT",), lambda: Msg(RESIZE_LIST, delta=LIST_PANE_STEP_PERCENT)),
        )
        self._edit_keys: KeyRegistry[Msg] = KeyRegistry[Msg]().register(
            KeyBinding(("CTRL_S",), lambda: Msg(EDIT_SAVE)),
            KeyBinding(("CTRL_C",), lambda: Msg(EDIT_CANCEL)),
        )

    @property
    def is_editing(self) -> bool:
        return self.mode == MODE_EDITING

    def selected_snippet(self) -> Snippet | None:
        if self.selected is None or not 0 <= self.selected < len(self.snippets):
            return None
        return self.snippets[self.selected]

    # -- event translation -------------------------------------------------

    def handle_event(self, event: Event) -> Msg | None:
        """Interpret one event; buffer edits are applied here directly."""
        if event.kind == "tick":
            self._expire_status_message()
            return None
        self.dirty = True
        if event.kind == "mouse":
            return self._handle_mouse_event(event.key)
        if self.is_editing:
            return self._handle_edit_key(event.key)
        return self._handle_browse_key(event.key)

    def _handle_browse_key(self, key: str) -> Msg | None:
        msg = self._browse_keys.dispatch(key)
        if msg is not None:
            return msg
        self.error_msg = None
        self.search_bar.handle_key(key)
        self.search_snippets()
        return None

    def _handle_edit_key(self, key: str) -> Msg | None:
        msg = self._edit_keys.dispatch(key)
        if msg is not None:
            return msg
        assert self.editor is not None
        self.error_msg = None
        self.editor.handle_key(key)
        return None

    def _handle_mouse_event(self, key: str) -> Msg | None:
        if self.is_editing:
            return None
        if key.startswith("MOUSE_WHEEL_DOWN"):
            return Msg(SELECT_NEXT)
        if key.startswith("MOUSE_WHEEL_UP"):
            return Msg(SELECT_PREV)
        return None

    def _edit_selected_msg(self) -> Msg:
        snippet = self.selected_snippet()
        if snippet is None:
            return Msg(EDIT_OPEN, snippet=Snippet())
        return Msg(EDIT_OPEN, snippet=snippet, index=self.selected)

    def _expire_status_message(self) -> None:
        if self.status_message and self.clock() >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            self.dirty = True

    # -- update --------------------------------------------------------------

    def update(self, msg: Msg) -> None:
        """Apply one message to the model."""
        self.dirty = True
        action = msg.action
        if action == SELECT_NEXT:
            self.select_next()
        elif action == SELECT_PREV:
            self.select_previous()
        elif action == REMOVE_SNIPPET:
            self.remove_snippet()
        elif action == EXECUTE_CMD:
            self.execute_selected()
        elif action == COPY_TO_CLIPBOARD:
            self.copy_to_clipboard()
        elif action == RESIZE_LIST:
            self.resize_list(msg.delta)
        elif action == EDIT_OPEN:
            self.open_editor(msg.snippet or Snippet(), msg.index)
        elif action == EDIT_SAVE:
            self.save_editor()
        elif action == EDIT_CANCEL:
            self.cancel_editor()
        elif action == APP_CLOSE:
            self.quit()
        else:
            raise ValueError(f"unknown message action: {action!r}")

    def select_next(self) -> None:
        if not self.snippets:
            self.selected = None
            return
        current = self.selected if self.selected is not None else -1
        self.selected = 0 if current >= len(self.snippets) - 1 else current + 1

    def select_previous(self) -> None:
        if not self.snippets:
            self.selected = None
            return
        current = self.selected if self.selected is not None else 0
        self.selected = len(self.snippets) - 1 if current <= 0 else current - 1

    def search_snippets(self) -> None:
        """Re-rank the whole list against the current search query."""
        self.snippets = rank_snippets(self.search_bar.text, self.snippets)
        self.selected = 0 if self.snippets else None

    def remove_snippet(self) -> None:
        index = self.selected
        if index is None or not 0 <= index < len(self.snippets):
            return
        self.snippets.pop(index)
        self.selected = min(index, len(self.snippets) - 1) if self.snippets else None

    def resize_list(self, delta: float) -> None:
        self.list_pane_percent = max(10.0, min(90.0, self.list_pane_percent + delta))
        self.services.save_list_pane_percent(self.list_pane_percent)

    def copy_to_clipboard(self) -> None:
        snippet = self.selected_snippet()
        if snippet is None:
            self.error_msg = "Nothing selected"
            return
        if self.services.copy_text(snippet.cmd):
            logger.info("Copied command to clipboard")
            self.set_status_message("Copied to clipboard")
        else:
            self.error_msg = "Clipboard unavailable"

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS

    def execute_selected(self) -> None:
        """Hand the terminal to the selected command, then quit.

        The terminal is restored and the event source stopped before the
        child starts. The list is persisted even when the launch fails.
        """
        snippet = self.selected_snippet()
        if snippet is None:
            self.error_msg = "Nothing selected"
            return
        try:
            self.services.release_terminal()
            self.terminal_restored = True
            self.services.stop_events()
            outcome = self.services.run_command(snippet.cmd)
            self.services.report(outcome.describe())
        finally:
            self.quit()

    def open_editor(self, seed: Snippet, index: int | None = None) -> None:
        """Enter Editing mode.

        Editing an existing entry takes it out of the list; ``save_editor``
        appends the result and ``cancel_editor`` puts the original back.
        """
        if index is not None and 0 <= index < len(self.snippets):
            self.editing_original = (index, self.snippets.pop(index))
            self.selected = 0 if self.snippets else None
        else:
            self.editing_original = None
        self.editor = TextInput(format_snippet(seed), multiline=True, placeholder=EDITOR_PLACEHOLDER)
        self.error_msg = None
        self.mode = MODE_EDITING

    def save_editor(self) -> None:
        """Parse the buffer; on failure stay in Editing with the text intact."""
        if self.editor is None:
            return
        try:
            snippet = parse_snippet(self.editor.text)
        except SnippetParseError as exc:
            logger.info("Rejected editor text: %s", exc)
            self.error_msg = f"Invalid snippet: {exc}"
            return
        self.snippets.append(snippet)
        self.selected = 0
        self._close_editor()

    def cancel_editor(self) -> None:
        if self.editing_original is not None:
            index, original = self.editing_original
            self.snippets.insert(min(index, len(self.snippets)), original)
            self.selected = 0
        self._close_editor()

    def _close_editor(self) -> None:
        self.editor = None
        self.editing_original = None
        self.error_msg = None
        self.mode = MODE_BROWSE

    def quit(self) -> None:
        """Request loop exit and persist the current list."""
        self.quit_requested = True
        self.services.save_snippets(self.snippets)
