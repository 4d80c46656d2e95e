"""Regression tests for raw-key decoding.

Covers ESC timing, arrow and paging sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from jigolo import input as input_mod
from jigolo.key_registry import KeyComboBinding, KeyComboRegistry


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[B\x1bOC\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_paging_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[5~\x1b[6~", 2), ["PAGE_UP", "PAGE_DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_tokens(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\t\x7f\x08\r\n", 6),
            ["CTRL_C", "TAB", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF"],
        )

    def test_printable_and_multibyte_characters(self) -> None:
        self.assertEqual(self._read_all("vé€".encode("utf-8"), 3), ["v", "é", "€"])

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=5)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_reports_whether_a_handler_ran(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j", "DOWN"), lambda: calls.append("down")),
        )

        self.assertTrue(registry.dispatch("DOWN"))
        self.assertTrue(registry.dispatch("j"))
        self.assertFalse(registry.dispatch("x"))
        self.assertEqual(calls, ["down", "down"])

    def test_later_binding_overrides_earlier_combo(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry()
        registry.register_binding(KeyComboBinding(("q",), lambda: calls.append("first")))
        registry.register_binding(KeyComboBinding(("q",), lambda: calls.append("second")))

        registry.dispatch("q")

        self.assertEqual(calls, ["second"])


if __name__ == "__main__":
    unittest.main()
