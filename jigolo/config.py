"""Process-level configuration resolved once at startup.

Home directory and snippet-library location are computed here and handed to
the session as a ``SessionConfig`` so interactive code never reads the
environment on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "jigolo"
LIBRARY_FILENAME = "library.toml"
LIBRARY_PATH_ENV = "JIGOLO_LIBRARY"
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class SessionConfig:
    """Explicit inputs for one interactive session."""

    library_path: Path | None = None
    style: str = DEFAULT_STYLE
    no_color: bool = False
    home: Path | None = None


def resolve_home() -> Path | None:
    """Return the user's home directory, or ``None`` when it cannot be determined."""
    raw_home = os.environ.get("HOME")
    if raw_home:
        return Path(raw_home)
    try:
        return Path.home()
    except RuntimeError:
        return None


def library_path_in(config_dir: Path) -> Path:
    """Return the library file location inside ``config_dir``."""
    return Path(config_dir) / LIBRARY_FILENAME


def default_library_path() -> Path | None:
    """Resolve the snippet-library file path.

    ``JIGOLO_LIBRARY`` wins when set. Otherwise the platform user config
    directory is used. Returns ``None`` when no location can be determined.
    """
    override = os.environ.get(LIBRARY_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    try:
        config_dir = user_config_dir(APP_NAME, appauthor=False)
    except Exception:
        return None
    if not config_dir:
        return None
    return library_path_in(Path(config_dir))


def build_session_config(style: str = DEFAULT_STYLE, no_color: bool = False) -> SessionConfig:
    """Collect environment-derived settings into one immutable config."""
    return SessionConfig(
        library_path=default_library_path(),
        style=style,
        no_color=no_color,
        home=resolve_home(),
    )
