"""Interactive session bootstrap.

Wires the store, terminal, event source, and renderer around ``App`` and
guarantees the terminal is restored on every exit path.
"""

from __future__ import annotations

import sys
from functools import partial

from .app import App, AppServices
from .clipboard import copy_text_to_clipboard
from .config import save_list_pane_percent
from .events import EventSource
from .loop import run_main_loop
from .render import render_frame
from .runner import run_shell_command
from .store import SnippetStore
from .terminal import TerminalController, install_restore_hook


def _report(message: str) -> None:
    sys.stdout.write(message + "\n")
    sys.stdout.flush()


def run_app(
    store: SnippetStore,
    *,
    shell: str,
    list_pane_percent: float,
    style: str | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> App:
    """Load snippets, run the TUI until quit, and return the final model.

    Load errors are raised before the terminal is touched. Any error raised
    inside the loop reaches the caller after the terminal has been restored.
    """
    snippets = store.load()

    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    events = EventSource(stdin_fd)
    services = AppServices(
        save_snippets=store.save,
        release_terminal=terminal.restore,
        stop_events=events.stop,
        run_command=partial(run_shell_command, shell=shell),
        report=_report,
        copy_text=copy_text_to_clipboard,
        save_list_pane_percent=save_list_pane_percent,
    )
    app = App(snippets, services, list_pane_percent=list_pane_percent)

    uninstall_hook = install_restore_hook(terminal.restore)
    try:
        terminal.enable_tui_mode()
        events.start()
        run_main_loop(app, events, partial(render_frame, stdout_fd=stdout_fd, style=style))
    finally:
        events.stop()
        if not app.terminal_restored:
            terminal.restore()
            app.terminal_restored = True
    # The hook stays installed while an exception is propagating.
    uninstall_hook()
    return app
