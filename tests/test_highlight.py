"""Tests for content reading, sanitizing, and Pygments highlighting."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from jigolo.ansi import strip_ansi
from jigolo.highlight import highlight_lines, read_text, sanitize_terminal_text


class ReadTextTests(unittest.TestCase):
    def test_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "CLAUDE.md"
            path.write_bytes(b"caf\xe9\n")

            self.assertEqual(read_text(path), "café\n")

    def test_missing_file_raises_oserror(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                read_text(Path(tmp) / "missing.md")


class SanitizeTests(unittest.TestCase):
    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07"), "a\\x1b[2Jb\\x07")

    def test_plain_text_is_unchanged(self) -> None:
        self.assertEqual(sanitize_terminal_text("tabs\tand\nnewlines"), "tabs\tand\nnewlines")


class HighlightLinesTests(unittest.TestCase):
    def test_colored_output_keeps_one_row_per_line(self) -> None:
        lines = ["def main():", "", "    return \"done\"  # finish"]

        rendered = highlight_lines(lines, Path("tool.py"))

        self.assertEqual(len(rendered), len(lines))
        self.assertEqual([strip_ansi(row) for row in rendered], lines)
        self.assertIn("\x1b[", "".join(rendered))

    def test_unknown_extension_and_style_fall_back(self) -> None:
        lines = ["just text"]

        rendered = highlight_lines(lines, Path("notes.unknown-ext"), style="no-such-style")

        self.assertEqual([strip_ansi(row) for row in rendered], lines)

    def test_empty_input(self) -> None:
        self.assertEqual(highlight_lines([], None), [])


if __name__ == "__main__":
    unittest.main()
