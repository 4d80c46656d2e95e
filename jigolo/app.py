"""Runtime composition layer for jigolo.

Builds the session from discovered roots and hands it to the event loop
inside a raw-mode terminal. Without a TTY on stdin the flat listing is
printed instead.
"""

from __future__ import annotations

import os
import sys

from .config import SessionConfig
from .debug import get_logger
from .discovery import SourceRoot, format_listing
from .loop import run_session_loop
from .session import Session
from .terminal import TerminalController

log = get_logger("app")


def run_app(roots: list[SourceRoot], config: SessionConfig) -> None:
    """Run an interactive session over ``roots`` until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        log.info("stdin is not a tty, printing listing")
        sys.stdout.write(format_listing(roots))
        return

    session = Session(roots, config=config)
    log.info(
        "starting session with %d roots, library at %s",
        len(session.tree.roots),
        config.library_path,
    )
    terminal = TerminalController(stdin_fd, stdout_fd)
    run_session_loop(session, terminal, stdin_fd, stdout_fd)
