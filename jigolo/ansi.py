"""ANSI-aware text measurement and line shaping utilities.

Clipping and padding preserve escape sequences so styled rows stay aligned
with the fixed-width pane grid.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"
SGR_RE = re.compile(r"\x1b\[[0-9;]*m")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible column count of ``text`` ignoring escape sequences."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad the remainder with spaces."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    if "\x1b" in clipped:
        clipped += RESET
    if used < width:
        clipped += " " * (width - used)
    return clipped


def styled(text: str, sgr: str) -> str:
    """Wrap ``text`` in an SGR sequence, re-applying it after every inner SGR.

    Highlighter output resets attributes with compound codes such as
    ``\\x1b[39;49;00m``, so the overlay is repeated after each one.
    """
    if not text or not sgr:
        return text
    return sgr + SGR_RE.sub(lambda match: match.group(0) + sgr, text) + RESET
