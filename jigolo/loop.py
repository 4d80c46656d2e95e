"""Render-then-read event loop for an interactive session."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable

from .debug import get_logger
from .input import read_key
from .render import render_session
from .session import Session
from .terminal import TerminalController

log = get_logger("loop")


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Collapse CR, LF, and CR+LF into one ``ENTER`` token.

    Returns the key to dispatch (``None`` to drop it) and the new
    ``skip_next_lf`` flag.
    """
    if skip_next_lf and key == "ENTER_LF":
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def run_session_loop(
    session: Session,
    terminal: TerminalController,
    stdin_fd: int,
    stdout_fd: int,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
) -> None:
    """Drive ``session`` until it requests exit or stdin closes.

    Each iteration renders first, so ``viewport_height`` reflects the current
    terminal size before the next key is dispatched.
    """
    skip_next_lf = False
    with terminal.raw_mode():
        while not session.exit:
            term = get_terminal_size((80, 24))
            render_session(session, term.columns, term.lines, stdout_fd)

            try:
                raw_key = read_key(stdin_fd)
            except KeyboardInterrupt:
                continue
            if raw_key == "":
                log.debug("stdin closed, leaving session loop")
                break

            key, skip_next_lf = normalize_enter(raw_key, skip_next_lf)
            if key is None:
                continue
            session.handle_key(key)
