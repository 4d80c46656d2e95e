"""Content-pane text buffer with cursor, scroll, and line selection.

Cursor movement always drags the scroll window along; scroll is never moved
on its own. ``viewport_height`` is written by the renderer before each key is
handled and only read here.
"""

from __future__ import annotations

TAB_REPLACEMENT = "    "


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` like a line iterator: no phantom line after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class ContentState:
    """Loaded text plus cursor/scroll/selection bookkeeping for the content pane."""

    def __init__(self) -> None:
        self._text: str | None = None
        self._lines: list[str] = []
        self.cursor = 0
        self.scroll = 0
        self.visual_anchor: int | None = None
        self.viewport_height = 0

    @property
    def text(self) -> str | None:
        return self._text

    @text.setter
    def text(self, value: str | None) -> None:
        self._text = value
        self._lines = split_lines(value) if value is not None else []

    @property
    def lines(self) -> list[str]:
        return self._lines

    def line_count(self) -> int:
        return len(self._lines)

    def max_cursor(self) -> int:
        return max(0, self.line_count() - 1)

    def _page_size(self) -> int:
        return max(1, self.viewport_height)

    def cursor_down(self) -> None:
        if self.cursor < self.max_cursor():
            self.cursor += 1
            self.ensure_cursor_visible()

    def cursor_up(self) -> None:
        self.cursor = max(0, self.cursor - 1)
        self.ensure_cursor_visible()

    def cursor_page_down(self) -> None:
        self.cursor = min(self.cursor + self._page_size(), self.max_cursor())
        self.ensure_cursor_visible()

    def cursor_page_up(self) -> None:
        self.cursor = max(0, self.cursor - self._page_size())
        self.ensure_cursor_visible()

    def ensure_cursor_visible(self) -> None:
        """Shift ``scroll`` so the cursor row sits inside the viewport."""
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.viewport_height > 0 and self.cursor >= self.scroll + self.viewport_height:
            self.scroll = self.cursor - self.viewport_height + 1

    def load_text(self, raw: str) -> None:
        """Replace buffer text and reset cursor, scroll, and selection.

        Tabs are expanded to four spaces up front; the renderer lays out
        fixed-width cells and must not meet a tab stop.
        """
        self.text = raw.replace("\t", TAB_REPLACEMENT)
        self.cursor = 0
        self.scroll = 0
        self.visual_anchor = None

    def selection_range(self) -> tuple[int, int] | None:
        if self.visual_anchor is None:
            return None
        return min(self.visual_anchor, self.cursor), max(self.visual_anchor, self.cursor)

    def selected_text(self) -> str | None:
        """Return selected lines joined by ``\\n`` or ``None`` without a selection.

        ``end`` is clamped to the last line when the buffer shrank after the
        anchor was placed.
        """
        selection = self.selection_range()
        if selection is None or self._text is None:
            return None
        start, end = selection
        if start >= len(self._lines):
            return None
        end = min(end, len(self._lines) - 1)
        return "\n".join(self._lines[start : end + 1])
