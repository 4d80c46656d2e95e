"""Context-file discovery across user-supplied root directories.

Walks each root with subtree pruning for dependency/build directories and
collects sorted ``CLAUDE.md`` paths. Also resolves the optional global
context file that lives under the user's home directory.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .debug import get_logger

CONTEXT_FILE_NAME = "CLAUDE.md"
MAX_WALK_DEPTH = 100

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        "target",
        ".cache",
        "__pycache__",
        ".venv",
        "vendor",
        "dist",
        ".next",
        ".nuxt",
        "build",
    }
)

log = get_logger("discovery")


@dataclass(frozen=True)
class SourceRoot:
    """One root directory plus every context file found beneath it."""

    path: Path
    files: tuple[Path, ...] = ()

    @property
    def file_count(self) -> int:
        return len(self.files)

    def relative_label(self, file_path: Path) -> str:
        """Return ``file_path`` relative to this root, or the full path outside it."""
        try:
            return str(file_path.relative_to(self.path))
        except ValueError:
            return str(file_path)

    def describe(self) -> str:
        """Render the ``--list`` block for this root."""
        count = self.file_count
        label = "file" if count == 1 else "files"
        lines = [f"{self.path} ({count} {label})"]
        lines.extend(f"  {self.relative_label(file_path)}" for file_path in self.files)
        return "\n".join(lines) + "\n"


def should_descend(dir_name: str) -> bool:
    return dir_name not in SKIP_DIRS


def _log_walk_error(exc: OSError) -> None:
    log.warning("skipping %s: %s", exc.filename or "<unknown>", exc)


def find_context_files(root: Path, file_name: str = CONTEXT_FILE_NAME) -> list[Path]:
    """Return sorted paths of ``file_name`` files found under ``root``.

    Directories named in ``SKIP_DIRS`` are removed from the walk before
    descending, so their subtrees are never scanned. Unreadable directories
    are logged and skipped.
    """
    root = Path(root)
    base_depth = len(root.parts)
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error, followlinks=True):
        current = Path(dirpath)
        if len(current.parts) - base_depth >= MAX_WALK_DEPTH:
            dirnames[:] = []
        else:
            dirnames[:] = [name for name in dirnames if should_descend(name)]
        if file_name in filenames and (current / file_name).is_file():
            found.append(current / file_name)
    found.sort()
    return found


def find_global_context_file_in(home: Path) -> Path | None:
    """Return ``home/.claude/CLAUDE.md`` when it is a regular file."""
    path = Path(home) / ".claude" / CONTEXT_FILE_NAME
    return path if path.is_file() else None


def find_global_context_file(home: Path | None = None) -> Path | None:
    if home is None:
        raw_home = os.environ.get("HOME")
        if not raw_home:
            return None
        home = Path(raw_home)
    return find_global_context_file_in(home)


def resolve_root(path: Path) -> tuple[Path | None, str | None]:
    """Validate one CLI path, returning ``(resolved_dir, warning)``."""
    if not path.exists():
        return None, f"path does not exist: {path}"
    if not path.is_dir():
        return None, f"not a directory: {path}"
    try:
        return path.resolve(), None
    except OSError:
        return path, None


def discover_roots(
    paths: Iterable[Path],
    home: Path | None = None,
    warn: Callable[[str], None] | None = None,
) -> tuple[list[SourceRoot], int]:
    """Scan every path and return ``(roots, failed_count)``.

    Invalid paths are reported through ``warn`` (one message each) and
    counted. When a global context file exists and none of the scanned roots
    already contains it, a synthetic root for its directory is inserted first.
    The global root is only added when at least one path resolved or none
    failed, so callers can still distinguish the all-failed case.
    """
    roots: list[SourceRoot] = []
    failed_count = 0
    for raw_path in paths:
        resolved, warning = resolve_root(Path(raw_path))
        if resolved is None:
            failed_count += 1
            log.warning(warning)
            if warn is not None:
                warn(warning)
            continue
        roots.append(SourceRoot(path=resolved, files=tuple(find_context_files(resolved))))

    if not roots and failed_count > 0:
        return roots, failed_count

    global_path = find_global_context_file(home)
    if global_path is not None:
        resolved_global = global_path.resolve()
        already_found = any(
            global_path in root.files or resolved_global in root.files for root in roots
        )
        if not already_found:
            roots.insert(0, SourceRoot(path=global_path.parent, files=(global_path,)))
    return roots, failed_count


def format_listing(roots: list[SourceRoot]) -> str:
    """Build the flat ``--list`` report for ``roots``."""
    total = sum(root.file_count for root in roots)
    if total == 0:
        return f"No {CONTEXT_FILE_NAME} files found.\n"

    out: list[str] = []
    for root in roots:
        out.append("\n")
        out.append(root.describe())
    file_label = "file" if total == 1 else "files"
    dir_label = "directory" if len(roots) == 1 else "directories"
    out.append(f"Found {total} {CONTEXT_FILE_NAME} {file_label} in {len(roots)} {dir_label}.\n")
    return "".join(out)
