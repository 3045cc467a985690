"""Main interactive event loop.

Render when dirty, wait for exactly one event, translate it, apply it.
Waiting on the event source is the loop's only suspension point.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from typing import Protocol

from .app import APP_CLOSE, App, Msg
from .events import Event


class EventStream(Protocol):
    def next(self, timeout: float | None = None) -> Event | None: ...


def run_main_loop(
    app: App,
    events: EventStream,
    draw: Callable[[App, int, int], None],
    get_terminal_size: Callable[..., object] = shutil.get_terminal_size,
) -> None:
    """Run until ``app.quit_requested`` is set by an update."""
    last_size: tuple[int, int] | None = None
    while not app.quit_requested:
        term = get_terminal_size((80, 24))
        size = (term.columns, term.lines)
        if size != last_size:
            last_size = size
            app.dirty = True
        if app.dirty:
            draw(app, size[0], size[1])
            app.dirty = False

        event = events.next()
        if event is None:
            # Source stopped or its producer exited: nothing more can arrive.
            app.update(Msg(APP_CLOSE))
            break
        msg = app.handle_event(event)
        if msg is not None:
            app.update(msg)
