"""Screen geometry for the split tree/content view."""

from __future__ import annotations

from dataclasses import dataclass

TREE_PANE_PERCENT = 30
LIBRARY_LIST_PERCENT = 40
BAR_HEIGHT = 3
HELP_HEIGHT = 1


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def inner_height(self) -> int:
        """Rows left inside a one-cell border."""
        return max(0, self.height - 2)

    @property
    def inner_width(self) -> int:
        return max(0, self.width - 2)


@dataclass(frozen=True)
class FrameLayout:
    tree: Rect
    main: Rect
    bar: Rect | None
    help: Rect


def split_horizontal(area: Rect, left_percent: int) -> tuple[Rect, Rect]:
    left_width = area.width * left_percent // 100
    left = Rect(area.x, area.y, left_width, area.height)
    right = Rect(area.x + left_width, area.y, area.width - left_width, area.height)
    return left, right


def split_vertical(area: Rect, top_percent: int) -> tuple[Rect, Rect]:
    top_height = area.height * top_percent // 100
    top = Rect(area.x, area.y, area.width, top_height)
    bottom = Rect(area.x, area.y + top_height, area.width, area.height - top_height)
    return top, bottom


def compute_layout(width: int, height: int, show_bar: bool) -> FrameLayout:
    """Split the screen into tree, main pane, optional bar, and help row.

    The help row and the bar keep their fixed heights; the panes get
    whatever is left.
    """
    width = max(0, width)
    height = max(0, height)
    help_height = min(HELP_HEIGHT, height)
    bar_height = min(BAR_HEIGHT, height - help_height) if show_bar else 0
    main_height = height - help_height - bar_height

    panes = Rect(0, 0, width, main_height)
    tree, main = split_horizontal(panes, TREE_PANE_PERCENT)
    bar = Rect(0, main_height, width, bar_height) if show_bar else None
    help_rect = Rect(0, main_height + bar_height, width, help_height)
    return FrameLayout(tree=tree, main=main, bar=bar, help=help_rect)
