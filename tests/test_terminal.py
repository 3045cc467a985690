"""Tests for terminal mode control and the crash restore hook.

Verifies raw-mode lifecycle safety, restore idempotency, and the escape
sequences written when entering and leaving the TUI.
"""

from __future__ import annotations

import sys
import termios
import unittest
from unittest import mock

from chopsticks.terminal import (
    ENTER_TUI_SEQUENCE,
    LEAVE_TUI_SEQUENCE,
    TerminalController,
    install_restore_hook,
)


def _controller() -> TerminalController:
    with mock.patch("chopsticks.terminal.termios.tcgetattr", return_value=[0]):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("chopsticks.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "chopsticks.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("chopsticks.terminal.os.write") as write_mock, mock.patch(
            "chopsticks.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            self.assertTrue(controller.tui_active)
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.tui_active)

    def test_restore_twice_writes_leave_sequence_once(self) -> None:
        controller = _controller()
        with mock.patch("chopsticks.terminal.tty.setraw"), mock.patch(
            "chopsticks.terminal.os.write"
        ) as write_mock, mock.patch("chopsticks.terminal.termios.tcsetattr") as setattr_mock:
            controller.enable_tui_mode()
            controller.restore()
            controller.restore()

        self.assertEqual(
            write_mock.call_args_list,
            [mock.call(1, ENTER_TUI_SEQUENCE), mock.call(1, LEAVE_TUI_SEQUENCE)],
        )
        setattr_mock.assert_called_once()

    def test_restore_without_enable_is_a_no_op(self) -> None:
        controller = _controller()
        with mock.patch("chopsticks.terminal.os.write") as write_mock, mock.patch(
            "chopsticks.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller.restore()

        write_mock.assert_not_called()
        setattr_mock.assert_not_called()


class RestoreHookTests(unittest.TestCase):
    def test_hook_restores_before_delegating_and_uninstalls(self) -> None:
        calls: list[str] = []
        previous = mock.Mock(side_effect=lambda *args: calls.append("previous"))

        with mock.patch.object(sys, "excepthook", previous):
            uninstall = install_restore_hook(lambda: calls.append("restore"))
            self.assertIsNot(sys.excepthook, previous)

            error = RuntimeError("crash")
            sys.excepthook(RuntimeError, error, None)
            uninstall()

            self.assertIs(sys.excepthook, previous)

        self.assertEqual(calls, ["restore", "previous"])
        previous.assert_called_once_with(RuntimeError, error, None)

    def test_hook_still_delegates_when_restore_fails(self) -> None:
        previous = mock.Mock()

        def failing_restore() -> None:
            raise termios.error("not a tty")

        with mock.patch.object(sys, "excepthook", previous):
            install_restore_hook(failing_restore)
            sys.excepthook(ValueError, ValueError("x"), None)

        previous.assert_called_once()


if __name__ == "__main__":
    unittest.main()
