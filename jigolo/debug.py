"""Logging bootstrap for jigolo.

The TUI owns the terminal in raw mode, so log records never go to stderr
while a session runs. Records are written to a file only when debugging is
enabled through ``JIGOLO_DEBUG`` / ``JIGOLO_LOG``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEBUG_ENV = "JIGOLO_DEBUG"
LOG_PATH_ENV = "JIGOLO_LOG"
DEFAULT_DEBUG_LOG = "jigolo_debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER: logging.Logger | None = None


def _debug_enabled() -> bool:
    level_env = os.environ.get(DEBUG_ENV, "0").lower()
    return level_env in {"1", "true", "yes", "on", "debug"}


def _log_path(debug_enabled: bool) -> Path | None:
    raw = os.environ.get(LOG_PATH_ENV)
    if raw:
        return Path(raw).expanduser()
    if debug_enabled:
        return Path.cwd() / DEFAULT_DEBUG_LOG
    return None


def get_logger(name: str = "jigolo") -> logging.Logger:
    """Return a child of the package logger, configuring handlers on first use."""
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER.getChild(name)

    debug_enabled = _debug_enabled()
    level = logging.DEBUG if debug_enabled else logging.INFO

    logger = logging.getLogger("jigolo")
    logger.setLevel(level)
    logger.propagate = False

    if not logger.handlers:
        log_path = _log_path(debug_enabled)
        handler: logging.Handler
        if log_path is None:
            handler = logging.NullHandler()
        else:
            try:
                handler = logging.FileHandler(log_path, encoding="utf-8")
            except OSError:
                handler = logging.NullHandler()
            else:
                handler.setLevel(level)
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    _LOGGER = logger
    return logger.getChild(name)


def reset_logger() -> None:
    """Drop cached handlers so the next ``get_logger`` call reconfigures."""
    global _LOGGER
    logger = logging.getLogger("jigolo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
