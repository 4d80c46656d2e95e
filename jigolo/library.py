"""Snippet-library persistence.

Snippets live in a TOML document with one ``[[snippets]]`` table per entry.
Every mutating helper loads the current file, edits it, and writes it back,
so the file on disk is always the source of truth.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path

import toml


class LibraryError(Exception):
    """Raised when the library file cannot be read, parsed, or written."""


@dataclass(frozen=True)
class Snippet:
    """A titled excerpt of a context file."""

    title: str
    content: str
    source: str = ""


@dataclass
class SnippetLibrary:
    """Ordered snippet list; snippets are addressed by position."""

    snippets: list[Snippet] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.snippets)

    def get(self, index: int) -> Snippet | None:
        if 0 <= index < len(self.snippets):
            return self.snippets[index]
        return None


def _snippet_from_table(raw: object, path: Path) -> Snippet:
    if not isinstance(raw, dict):
        raise LibraryError(f"failed to parse {path}: snippet entry is not a table")
    title = raw.get("title")
    content = raw.get("content")
    source = raw.get("source", "")
    if not isinstance(title, str) or not isinstance(content, str):
        raise LibraryError(f"failed to parse {path}: snippet needs string title and content")
    if not isinstance(source, str):
        source = str(source)
    return Snippet(title=title, content=content, source=source)


def parse_library(text: str, path: Path) -> SnippetLibrary:
    """Decode library TOML, raising ``LibraryError`` on any malformed shape."""
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise LibraryError(f"failed to parse {path}: {exc}") from exc
    raw_snippets = data.get("snippets", [])
    if not isinstance(raw_snippets, list):
        raise LibraryError(f"failed to parse {path}: 'snippets' must be an array of tables")
    return SnippetLibrary(snippets=[_snippet_from_table(raw, path) for raw in raw_snippets])


def dump_library(lib: SnippetLibrary) -> str:
    return toml.dumps({"snippets": [asdict(snippet) for snippet in lib.snippets]})


def load_library(path: Path) -> SnippetLibrary:
    """Load the library at ``path``; a missing file yields an empty library."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return SnippetLibrary()
    except (OSError, UnicodeDecodeError) as exc:
        raise LibraryError(f"failed to read {path}: {exc}") from exc
    return parse_library(text, path)


def save_library(lib: SnippetLibrary, path: Path) -> None:
    """Write ``lib`` to ``path``, creating parent directories as needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LibraryError(f"failed to create directory {path.parent}: {exc}") from exc
    try:
        path.write_text(dump_library(lib), encoding="utf-8")
    except OSError as exc:
        raise LibraryError(f"failed to write {path}: {exc}") from exc


def append_snippet(snippet: Snippet, path: Path) -> None:
    lib = load_library(path)
    lib.snippets.append(snippet)
    save_library(lib, path)


def delete_snippet(index: int, path: Path) -> None:
    """Remove the snippet at ``index``; out-of-range indices leave the file untouched."""
    lib = load_library(path)
    if 0 <= index < len(lib.snippets):
        del lib.snippets[index]
        save_library(lib, path)


def rename_snippet(index: int, new_title: str, path: Path) -> None:
    """Retitle the snippet at ``index``; out-of-range indices leave the file untouched."""
    lib = load_library(path)
    if 0 <= index < len(lib.snippets):
        old = lib.snippets[index]
        lib.snippets[index] = Snippet(title=new_title, content=old.content, source=old.source)
        save_library(lib, path)
