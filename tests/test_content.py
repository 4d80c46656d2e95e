"""Tests for the content-pane buffer.

Covers cursor clamping, scroll-follow arithmetic, paging, and line-range
selection over loaded text.
"""

from __future__ import annotations

import random
import unittest

from jigolo.content import ContentState, split_lines


def _buffer(line_count: int, viewport_height: int = 0) -> ContentState:
    content = ContentState()
    content.load_text("\n".join(f"L{idx}" for idx in range(line_count)))
    content.viewport_height = viewport_height
    return content


class SplitLinesTests(unittest.TestCase):
    def test_trailing_newline_does_not_add_empty_line(self) -> None:
        self.assertEqual(split_lines("a\nb\n"), ["a", "b"])

    def test_carriage_returns_are_stripped(self) -> None:
        self.assertEqual(split_lines("a\r\nb\r\n"), ["a", "b"])

    def test_empty_text_has_no_lines(self) -> None:
        self.assertEqual(split_lines(""), [])

    def test_interior_blank_lines_are_kept(self) -> None:
        self.assertEqual(split_lines("a\n\nb"), ["a", "", "b"])


class CursorMovementTests(unittest.TestCase):
    def test_scroll_follows_cursor_past_viewport_bottom(self) -> None:
        content = _buffer(5, viewport_height=3)

        for _ in range(3):
            content.cursor_down()

        self.assertEqual(content.cursor, 3)
        self.assertEqual(content.scroll, 1)

    def test_cursor_down_stops_at_last_line(self) -> None:
        content = _buffer(3, viewport_height=10)

        for _ in range(10):
            content.cursor_down()

        self.assertEqual(content.cursor, 2)
        self.assertEqual(content.scroll, 0)

    def test_cursor_up_at_top_is_noop(self) -> None:
        content = _buffer(3, viewport_height=2)

        content.cursor_up()

        self.assertEqual(content.cursor, 0)
        self.assertEqual(content.scroll, 0)

    def test_cursor_up_pulls_scroll_back(self) -> None:
        content = _buffer(10, viewport_height=3)
        content.cursor = 6
        content.scroll = 5

        content.cursor_up()
        content.cursor_up()

        self.assertEqual(content.cursor, 4)
        self.assertEqual(content.scroll, 4)

    def test_page_down_moves_by_viewport_height(self) -> None:
        content = _buffer(20, viewport_height=5)

        content.cursor_page_down()

        self.assertEqual(content.cursor, 5)
        self.assertEqual(content.scroll, 1)

    def test_page_down_clamps_to_last_line(self) -> None:
        content = _buffer(7, viewport_height=5)

        content.cursor_page_down()
        content.cursor_page_down()

        self.assertEqual(content.cursor, 6)

    def test_page_up_clamps_to_top(self) -> None:
        content = _buffer(20, viewport_height=5)
        content.cursor = 3

        content.cursor_page_up()

        self.assertEqual(content.cursor, 0)
        self.assertEqual(content.scroll, 0)

    def test_paging_with_zero_viewport_moves_one_line(self) -> None:
        content = _buffer(4, viewport_height=0)

        content.cursor_page_down()

        self.assertEqual(content.cursor, 1)

    def test_empty_buffer_keeps_cursor_at_zero(self) -> None:
        content = ContentState()

        content.cursor_down()
        content.cursor_page_down()
        content.cursor_up()

        self.assertEqual(content.cursor, 0)
        self.assertEqual(content.scroll, 0)

    def test_random_walk_keeps_cursor_and_scroll_invariants(self) -> None:
        rng = random.Random(1234)
        content = _buffer(37, viewport_height=6)
        moves = (
            content.cursor_down,
            content.cursor_up,
            content.cursor_page_down,
            content.cursor_page_up,
        )

        for _ in range(500):
            rng.choice(moves)()
            self.assertGreaterEqual(content.cursor, 0)
            self.assertLessEqual(content.cursor, content.max_cursor())
            self.assertLessEqual(content.scroll, content.cursor)
            self.assertLessEqual(content.cursor, content.scroll + content.viewport_height - 1)


class LoadAndSelectionTests(unittest.TestCase):
    def test_load_text_resets_cursor_scroll_and_anchor(self) -> None:
        content = _buffer(10, viewport_height=3)
        content.cursor = 8
        content.scroll = 6
        content.visual_anchor = 4

        content.load_text("fresh\ntext")

        self.assertEqual((content.cursor, content.scroll, content.visual_anchor), (0, 0, None))
        self.assertEqual(content.lines, ["fresh", "text"])

    def test_load_text_expands_tabs(self) -> None:
        content = ContentState()

        content.load_text("\tindented\ta")

        self.assertEqual(content.text, "    indented    a")

    def test_selection_range_is_normalized(self) -> None:
        content = _buffer(10)
        content.visual_anchor = 7
        content.cursor = 2

        self.assertEqual(content.selection_range(), (2, 7))

    def test_selection_range_is_none_without_anchor(self) -> None:
        self.assertIsNone(_buffer(3).selection_range())

    def test_selected_text_joins_inclusive_range(self) -> None:
        content = _buffer(5)
        content.visual_anchor = 3
        content.cursor = 1

        self.assertEqual(content.selected_text(), "L1\nL2\nL3")

    def test_selected_text_clamps_end_to_last_line(self) -> None:
        content = _buffer(3)
        content.visual_anchor = 1
        content.cursor = 9

        self.assertEqual(content.selected_text(), "L1\nL2")

    def test_selected_text_is_none_when_start_is_past_end(self) -> None:
        content = _buffer(2)
        content.visual_anchor = 5
        content.cursor = 6

        self.assertIsNone(content.selected_text())

    def test_selected_text_is_none_without_text(self) -> None:
        content = ContentState()
        content.visual_anchor = 0

        self.assertIsNone(content.selected_text())


if __name__ == "__main__":
    unittest.main()
