"""Key legend shown in the bottom help row.

The legend depends only on the current mode and, in normal mode, on which
pane has focus.
"""

from __future__ import annotations

from .ansi import RESET
from .session import Mode, Pane

HELP_KEY_SGR = "\033[1;30;100m"
HELP_DESC_SGR = "\033[90m"
HELP_SEPARATOR = "  "

_NORMAL_CONTENT_PAIRS: tuple[tuple[str, str], ...] = (
    ("q", "Quit"),
    ("Tab", "Files"),
    ("j/k", "Scroll"),
    ("v", "Select"),
    ("L", "Library"),
)

_NORMAL_TREE_PAIRS: tuple[tuple[str, str], ...] = (
    ("q", "Quit"),
    ("Tab", "Content"),
    ("j/k", "Navigate"),
    ("Enter", "Open"),
)

_VISUAL_SELECT_PAIRS: tuple[tuple[str, str], ...] = (
    ("j/k", "Extend"),
    ("s", "Save"),
    ("Esc", "Cancel"),
)

_TEXT_INPUT_PAIRS: tuple[tuple[str, str], ...] = (
    ("Enter", "Save"),
    ("Esc", "Cancel"),
)

_LIBRARY_BROWSE_PAIRS: tuple[tuple[str, str], ...] = (
    ("j/k", "Navigate"),
    ("r", "Rename"),
    ("d", "Delete"),
    ("Esc", "Back"),
)


def help_pairs(mode: Mode, pane: Pane) -> tuple[tuple[str, str], ...]:
    """Return ``(key, description)`` pairs for ``mode`` and the focused ``pane``."""
    if mode is Mode.NORMAL:
        return _NORMAL_CONTENT_PAIRS if pane is Pane.CONTENT else _NORMAL_TREE_PAIRS
    if mode is Mode.VISUAL_SELECT:
        return _VISUAL_SELECT_PAIRS
    if mode is Mode.LIBRARY_BROWSE:
        return _LIBRARY_BROWSE_PAIRS
    return _TEXT_INPUT_PAIRS


def help_line(mode: Mode, pane: Pane) -> str:
    """Render the legend as one styled row: inverted key chips followed by dim labels."""
    parts = [
        f"{HELP_KEY_SGR} {key} {RESET}{HELP_DESC_SGR} {desc}{RESET}"
        for key, desc in help_pairs(mode, pane)
    ]
    return HELP_SEPARATOR.join(parts)
