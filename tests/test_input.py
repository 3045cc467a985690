"""Regression tests for raw-key decoding.

Covers ESC timing, arrow/editing sequences, control-key token mapping,
UTF-8 text, and SGR mouse reports.
"""

import os
import time
import unittest

from chopsticks import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _keys(self, payload: bytes, count: int) -> list[str]:
        os.write(self.write_fd, payload)
        return [input_mod.read_key(self.read_fd, timeout_ms=20) for _ in range(count)]

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        os.write(self.write_fd, b"\x1b")
        started = time.monotonic()
        key = input_mod.read_key(self.read_fd, timeout_ms=20)
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_meta_prefixed_printable_key_is_an_alt_token(self) -> None:
        self.assertEqual(self._keys(b"\x1bb\x1b~", 3), ["ALT_b", "ALT_~", ""])

    def test_escape_does_not_swallow_following_control_key(self) -> None:
        self.assertEqual(self._keys(b"\x1b\x01", 2), ["ESC", "CTRL_A"])

    def test_timeout_without_input_returns_empty_token(self) -> None:
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=5), "")

    def test_arrow_and_editing_sequences(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F\x1b[3~\x1bOA", 8),
            ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END", "DELETE", "UP"],
        )

    def test_shift_arrows(self) -> None:
        self.assertEqual(self._keys(b"\x1b[1;2D\x1b[1;2C", 2), ["SHIFT_LEFT", "SHIFT_RIGHT"])

    def test_control_keys_used_by_bindings(self) -> None:
        self.assertEqual(
            self._keys(b"\x01\x03\x05\x12\x13\x19\x15\x7f\t", 9),
            ["CTRL_A", "CTRL_C", "CTRL_E", "CTRL_R", "CTRL_S", "CTRL_Y", "CTRL_U", "BACKSPACE", "TAB"],
        )

    def test_carriage_return_and_line_feed_are_distinct_tokens(self) -> None:
        self.assertEqual(self._keys(b"\r\n", 2), ["ENTER_CR", "ENTER_LF"])

    def test_multibyte_utf8_character_is_one_token(self) -> None:
        self.assertEqual(self._keys("é箸".encode("utf-8"), 2), ["é", "箸"])

    def test_sgr_mouse_wheel_and_click(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[<64;10;5M\x1b[<65;3;4M\x1b[<0;7;8M\x1b[<0;7;8m", 4),
            [
                "MOUSE_WHEEL_UP:10:5",
                "MOUSE_WHEEL_DOWN:3:4",
                "MOUSE_LEFT_DOWN:7:8",
                "MOUSE_LEFT_UP:7:8",
            ],
        )


if __name__ == "__main__":
    unittest.main()
