"""Frame composition for the session view.

``build_frame`` projects a ``Session`` onto a grid of fixed-width ANSI rows.
The only state it touches is ``session.content.viewport_height``, which is
set from the content pane's interior height whenever that pane is drawn so
the next key is handled with the current page size.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .ansi import RESET, clip_ansi_line, display_width, fit_ansi_line, styled
from .content import split_lines
from .help import help_line
from .highlight import highlight_lines, sanitize_terminal_text
from .layout import LIBRARY_LIST_PERCENT, Rect, compute_layout, split_vertical
from .session import LIBRARY_MODES, TEXT_INPUT_MODES, Mode, Pane, Session
from .tree import RootNode

ACTIVE_BORDER_SGR = "\033[36m"
INPUT_BORDER_SGR = "\033[33m"
SELECTED_LINE_SGR = "\033[100m"
CURSOR_LINE_SGR = "\033[4m"
REVERSED_SGR = "\033[7m"

TREE_TITLE = "CLAUDE.md files"
CONTENT_TITLE = "Content"
CONTENT_PLACEHOLDER = "Select a file to view its content."
LIBRARY_EMPTY_TITLE = "Library (empty)"
LIBRARY_EMPTY_MESSAGE = "No snippets saved. Use v to select, s to save."
SNIPPET_TITLE_BAR = "Snippet title"
RENAME_BAR = "Rename snippet"
STATUS_BAR = "Status"

SCROLLBAR_THUMB = "█"


def _border(text: str, sgr: str) -> str:
    return f"{sgr}{text}{RESET}" if sgr else text


def scrollbar_thumb(total: int, position: int, viewport: int, track: int) -> range | None:
    """Return the track rows covered by the thumb, or ``None`` when everything fits."""
    if track <= 0 or viewport <= 0 or total <= viewport:
        return None
    thumb = max(1, track * viewport // total)
    max_position = total - viewport
    start = (track - thumb) * min(max(0, position), max_position) // max_position
    return range(start, start + thumb)


def draw_box(
    rect: Rect,
    title: str,
    body: list[str],
    border_sgr: str = "",
    thumb: range | None = None,
) -> list[str]:
    """Draw a bordered box of exactly ``rect.height`` rows by ``rect.width`` columns."""
    width, height = rect.width, rect.height
    if width <= 0 or height <= 0:
        return []
    if width < 2:
        return [" " * width for _ in range(height)]

    inner = width - 2
    label = clip_ansi_line(title, inner)
    top = _border("┌", border_sgr) + label + _border("─" * (inner - display_width(label)) + "┐", border_sgr)
    rows = [top]
    for idx in range(rect.inner_height):
        line = body[idx] if idx < len(body) else ""
        right = SCROLLBAR_THUMB if thumb is not None and idx in thumb else "│"
        rows.append(_border("│", border_sgr) + fit_ansi_line(line, inner) + _border(right, border_sgr))
    if height > 1:
        rows.append(_border("└" + "─" * inner + "┘", border_sgr))
    return rows


def _pane_border(session: Session, pane: Pane) -> str:
    return ACTIVE_BORDER_SGR if session.active_pane is pane else ""


def _follow_offset(selected: int | None, visible: int) -> int:
    if selected is None or visible <= 0:
        return 0
    return max(0, selected - visible + 1)


def draw_tree_pane(session: Session, rect: Rect) -> list[str]:
    rows = session.tree.rows()
    selected = session.tree.selected_index()
    offset = _follow_offset(selected, rect.inner_height)
    inner = rect.inner_width

    body: list[str] = []
    for idx, row in enumerate(rows[offset : offset + rect.inner_height], start=offset):
        if isinstance(row.node, RootNode):
            marker = "▼ " if row.is_open else "▶ "
        else:
            marker = "  "
        text = "  " * row.depth + marker + sanitize_terminal_text(row.label)
        if idx == selected:
            text = styled(fit_ansi_line(text, inner), REVERSED_SGR)
        body.append(text)
    return draw_box(rect, TREE_TITLE, body, _pane_border(session, Pane.FILE_LIST))


@lru_cache(maxsize=16)
def _display_lines(text: str, path: Path | None, style: str, color: bool) -> tuple[str, ...]:
    lines = [sanitize_terminal_text(line) for line in split_lines(text)]
    if color:
        return tuple(highlight_lines(lines, path, style))
    return tuple(lines)


def content_title(session: Session) -> str:
    if session.mode in (Mode.VISUAL_SELECT, Mode.TITLE_INPUT):
        selection = session.content.selection_range()
        if selection is None:
            return f"{CONTENT_TITLE} [VISUAL]"
        start, end = selection
        return f"{CONTENT_TITLE} [VISUAL: lines {start + 1}-{end + 1}]"
    return CONTENT_TITLE


def draw_content_pane(session: Session, rect: Rect) -> list[str]:
    """Draw the content viewer and record its interior height as the viewport."""
    content = session.content
    content.viewport_height = rect.inner_height
    border = _pane_border(session, Pane.CONTENT)
    title = content_title(session)

    if content.text is None:
        return draw_box(rect, title, [CONTENT_PLACEHOLDER], border)

    path = session.loaded_node.path if session.loaded_node is not None else None
    lines = _display_lines(content.text, path, session.config.style, not session.config.no_color)
    selection = content.selection_range()
    show_cursor = session.active_pane is Pane.CONTENT
    inner = rect.inner_width

    body: list[str] = []
    for idx in range(content.scroll, min(len(lines), content.scroll + rect.inner_height)):
        sgr = ""
        if selection is not None and selection[0] <= idx <= selection[1]:
            sgr += SELECTED_LINE_SGR
        if show_cursor and idx == content.cursor:
            sgr += CURSOR_LINE_SGR
        line = lines[idx]
        body.append(styled(fit_ansi_line(line, inner), sgr) if sgr else line)

    thumb = scrollbar_thumb(len(lines), content.scroll, rect.inner_height, rect.inner_height)
    return draw_box(rect, title, body, border, thumb)


def draw_library_pane(session: Session, rect: Rect) -> list[str]:
    border = _pane_border(session, Pane.CONTENT)
    lib = session.library
    if lib is None or len(lib) == 0:
        return draw_box(rect, LIBRARY_EMPTY_TITLE, [LIBRARY_EMPTY_MESSAGE], border)

    list_rect, preview_rect = split_vertical(rect, LIBRARY_LIST_PERCENT)
    offset = _follow_offset(session.library_selected, list_rect.inner_height)
    inner = list_rect.inner_width
    items: list[str] = []
    visible = lib.snippets[offset : offset + list_rect.inner_height]
    for idx, snippet in enumerate(visible, start=offset):
        text = "  " + sanitize_terminal_text(snippet.title)
        if idx == session.library_selected:
            text = styled(fit_ansi_line(text, inner), REVERSED_SGR)
        items.append(text)
    rows = draw_box(list_rect, f"Library ({len(lib)} snippets)", items, border)

    snippet = session.selected_snippet()
    if snippet is None:
        preview_title, preview_body = "Preview", []
    else:
        preview_title = f"Preview: {sanitize_terminal_text(snippet.title)}"
        preview_body = [sanitize_terminal_text(line) for line in split_lines(snippet.content)]
    rows.extend(draw_box(preview_rect, preview_title, preview_body, border))
    return rows


def draw_bar(session: Session, rect: Rect) -> list[str]:
    """Draw the title prompt in text-input modes, else the pending status."""
    if session.mode in TEXT_INPUT_MODES:
        title = RENAME_BAR if session.mode is Mode.RENAME_INPUT else SNIPPET_TITLE_BAR
        prompt = sanitize_terminal_text(session.title_input) + styled(" ", REVERSED_SGR)
        return draw_box(rect, title, [prompt], INPUT_BORDER_SGR)
    return draw_box(rect, STATUS_BAR, [sanitize_terminal_text(session.status_message or "")])


def show_bar(session: Session) -> bool:
    return session.mode in TEXT_INPUT_MODES or session.status_message is not None


def build_frame(session: Session, width: int, height: int) -> list[str]:
    """Return the full screen as ``height`` rows of ``width`` display columns."""
    layout = compute_layout(width, height, show_bar(session))

    tree_rows = draw_tree_pane(session, layout.tree)
    if session.mode in LIBRARY_MODES:
        main_rows = draw_library_pane(session, layout.main)
    else:
        main_rows = draw_content_pane(session, layout.main)

    rows: list[str] = []
    for idx in range(layout.main.height):
        left = tree_rows[idx] if idx < len(tree_rows) else " " * layout.tree.width
        right = main_rows[idx] if idx < len(main_rows) else " " * layout.main.width
        rows.append(left + right)
    if layout.bar is not None:
        rows.extend(draw_bar(session, layout.bar))
    if layout.help.height > 0:
        rows.append(fit_ansi_line(help_line(session.mode, session.active_pane), width))
    return rows


def render_session(session: Session, width: int, height: int, stdout_fd: int) -> None:
    out: list[str] = ["\033[H\033[J"]
    out.append("\r\n".join(build_frame(session, width, height)))
    os.write(stdout_fd, "".join(out).encode("utf-8", errors="replace"))
