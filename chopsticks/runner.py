"""Run a snippet's command line with the real terminal.

The caller must already have released the terminal and stopped the event
source; this module only spawns, waits, and reports.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import subprocess
import threading
from dataclasses import dataclass

from .errors import CommandLaunchError

logger = logging.getLogger(__name__)

_TERMINAL_INTERRUPTS = (signal.SIGINT, signal.SIGQUIT)


@dataclass(frozen=True)
class CommandOutcome:
    """Exit status of a finished command."""

    returncode: int

    @property
    def signal_number(self) -> int | None:
        if self.returncode < 0:
            return -self.returncode
        return None

    def describe(self) -> str:
        signum = self.signal_number
        if signum is None:
            return f"Exited with status code: {self.returncode}"
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        return f"Process terminated by signal {name}"


@contextlib.contextmanager
def _interrupts_ignored():
    """Ignore terminal SIGINT/SIGQUIT in this process while the child owns the tty."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {signum: signal.signal(signum, signal.SIG_IGN) for signum in _TERMINAL_INTERRUPTS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def run_shell_command(cmd: str, shell: str = "/bin/sh") -> CommandOutcome:
    """Run ``cmd`` through ``shell -c`` with inherited stdio and wait for it.

    Ctrl-C and Ctrl-\\ typed while the command runs belong to the command:
    the child is spawned with default handlers, then this process ignores
    both signals until the child exits.
    """
    logger.info("Running command via %s: %s", shell, cmd)
    try:
        proc = subprocess.Popen([shell, "-c", cmd])
    except OSError as exc:
        raise CommandLaunchError(f"failed to launch {shell!r}: {exc}") from exc
    with _interrupts_ignored():
        returncode = proc.wait()
    outcome = CommandOutcome(returncode)
    logger.info("Command finished: %s", outcome.describe())
    return outcome
