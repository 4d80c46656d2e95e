"""Command-line front door for jigolo.

Parses CLI options, discovers context files under the given directories,
and either prints a report or launches the interactive browser.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .app import run_app
from .config import DEFAULT_STYLE, build_session_config
from .discovery import CONTEXT_FILE_NAME, discover_roots, format_listing
from .settings import discover_settings_files_in, format_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jigolo",
        description=(
            f"Browse {CONTEXT_FILE_NAME} context files across directories and "
            "save selected lines as reusable snippets."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Directories to scan. Defaults to the current directory.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help=f"Print discovered {CONTEXT_FILE_NAME} files instead of opening the browser.",
    )
    parser.add_argument(
        "--settings",
        action="store_true",
        help="Print Claude settings files for the current directory and exit.",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for content highlighting.")
    parser.add_argument("--no-color", action="store_true", help="Disable syntax highlighting.")
    parser.add_argument("--version", action="version", version=f"jigolo {__version__}")
    return parser


def _warn(message: str) -> None:
    sys.stderr.write(f"Warning: {message}\n")


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the requested action.

    Returns ``1`` when every supplied path failed to resolve to a directory,
    ``0`` otherwise (including when no context files were found).
    """
    args = build_parser().parse_args(argv)
    config = build_session_config(style=args.style, no_color=args.no_color)

    if args.settings:
        collection = discover_settings_files_in(config.home, Path.cwd())
        lines = format_settings(collection)
        if lines:
            sys.stdout.write("\n".join(lines) + "\n")
        else:
            sys.stdout.write("No settings files found.\n")
        return 0

    paths = [Path(raw) for raw in args.paths]
    dir_label = "directory" if len(paths) == 1 else "directories"
    sys.stderr.write(f"Scanning {len(paths)} {dir_label}...\n")

    roots, failed_count = discover_roots(paths, home=config.home, warn=_warn)
    if not roots and failed_count > 0:
        return 1

    if args.list:
        sys.stdout.write(format_listing(roots))
        return 0

    run_app(roots, config)
    return 0
