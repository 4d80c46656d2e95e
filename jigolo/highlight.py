"""Syntax highlighting and sanitization for content-pane text.

Highlighting runs through Pygments with a lexer guessed from the file name.
Output is split back into one ANSI string per source line.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .debug import get_logger

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()

log = get_logger("highlight")


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1. ``OSError`` propagates so
    callers can report unreadable files.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        log.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def _lexer_for(path: Path | None, source: str):
    if path is not None:
        try:
            return get_lexer_for_filename(path.name, source, stripnl=False, ensurenl=False)
        except ClassNotFound:
            pass
    return TextLexer(stripnl=False, ensurenl=False)


def highlight_lines(lines: list[str], path: Path | None, style: str = DEFAULT_STYLE) -> list[str]:
    """Return one ANSI-colored string per entry of ``lines``.

    Falls back to the plain lines whenever the highlighter output does not
    map back onto the input line-for-line.
    """
    if not lines:
        return []
    source = "\n".join(lines)
    formatter = _formatter_for_style(_normalize_style(style))
    try:
        rendered = pygments_highlight(source, _lexer_for(path, source), formatter)
    except Exception as exc:
        log.debug("highlighting failed for %s: %s", path, exc)
        return list(lines)
    out = rendered.split("\n")
    if len(out) == len(lines) + 1 and out[-1] in {"", "\x1b[39m", "\x1b[0m"}:
        out.pop()
    if len(out) != len(lines):
        return list(lines)
    return out
