"""Interactive session state machine.

Owns the tree navigator, the content buffer, the snippet-library view, and
the current ``Mode``. ``handle_key`` routes one key token to the handler for
the active mode; handlers mutate state and talk to the library module
synchronously.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from . import library
from .config import SessionConfig
from .content import ContentState
from .debug import get_logger
from .discovery import SourceRoot
from .highlight import read_text
from .key_registry import KeyComboBinding, KeyComboRegistry
from .library import LibraryError, Snippet, SnippetLibrary
from .tree import FileNode, RootNode, TreeNavigator

STATUS_EMPTY_TITLE = "Title cannot be empty."
STATUS_NO_SELECTION = "No text selected."
STATUS_NO_LIBRARY_PATH = "Cannot determine library path."
STATUS_SAVED = "Snippet saved!"
STATUS_DELETED = "Snippet deleted."
STATUS_RENAMED = "Snippet renamed."

log = get_logger("session")


class Mode(Enum):
    NORMAL = "normal"
    VISUAL_SELECT = "visual_select"
    TITLE_INPUT = "title_input"
    LIBRARY_BROWSE = "library_browse"
    RENAME_INPUT = "rename_input"


class Pane(Enum):
    FILE_LIST = "file_list"
    CONTENT = "content"


TEXT_INPUT_MODES = frozenset({Mode.TITLE_INPUT, Mode.RENAME_INPUT})
LIBRARY_MODES = frozenset({Mode.LIBRARY_BROWSE, Mode.RENAME_INPUT})


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single typed character rather than a key token."""
    return len(key) == 1 and key.isprintable()


def read_file_content(path: Path) -> str:
    """Read ``path`` for display, substituting an inline error on failure."""
    try:
        return read_text(path)
    except OSError as exc:
        log.warning("cannot read %s: %s", path, exc)
        return f"Error reading {path}: {exc}"


class Session:
    """State and key handling for one interactive run."""

    def __init__(
        self,
        roots: list[SourceRoot],
        config: SessionConfig | None = None,
        read_file: Callable[[Path], str] = read_file_content,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        self.exit = False
        self.mode = Mode.NORMAL
        self.active_pane = Pane.FILE_LIST
        self.tree = TreeNavigator(roots)
        self.content = ContentState()
        self.loaded_node: FileNode | None = None
        self.title_input = ""
        self.status_message: str | None = None
        self.library: SnippetLibrary | None = None
        self.library_selected = 0
        self._read_file = read_file
        self._registries = self._build_registries()
        self.load_selected_content()

    # -- key dispatch -------------------------------------------------------

    def _build_registries(self) -> dict[tuple[Mode, Pane | None], KeyComboRegistry]:
        tree_pane = KeyComboRegistry().register_bindings(
            KeyComboBinding(("q",), self.request_exit),
            KeyComboBinding(("TAB",), self.toggle_pane),
            KeyComboBinding(("ENTER",), self.select_tree_item),
            KeyComboBinding(("DOWN", "j"), lambda: self._navigate_tree(self.tree.key_down)),
            KeyComboBinding(("UP", "k"), lambda: self._navigate_tree(self.tree.key_up)),
            KeyComboBinding(("LEFT", "h"), lambda: self._navigate_tree(self.tree.key_left)),
            KeyComboBinding(("RIGHT", "l"), lambda: self._navigate_tree(self.tree.key_right)),
        )
        content_pane = KeyComboRegistry().register_bindings(
            KeyComboBinding(("q",), self.request_exit),
            KeyComboBinding(("TAB",), self.toggle_pane),
            KeyComboBinding(("DOWN", "j"), self.content.cursor_down),
            KeyComboBinding(("UP", "k"), self.content.cursor_up),
            KeyComboBinding(("PAGE_DOWN",), self.content.cursor_page_down),
            KeyComboBinding(("PAGE_UP",), self.content.cursor_page_up),
            KeyComboBinding(("v",), self.begin_visual_select),
            KeyComboBinding(("L",), self.enter_library_browse),
        )
        visual_select = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), self.cancel_visual_select),
            KeyComboBinding(("DOWN", "j"), self.content.cursor_down),
            KeyComboBinding(("UP", "k"), self.content.cursor_up),
            KeyComboBinding(("s",), self.begin_title_input),
        )
        title_input = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), self.cancel_title_input),
            KeyComboBinding(("ENTER",), self.save_current_snippet),
            KeyComboBinding(("BACKSPACE",), self._pop_title_char),
        )
        library_browse = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC", "q"), self.leave_library_browse),
            KeyComboBinding(("DOWN", "j"), lambda: self.move_library_selection(1)),
            KeyComboBinding(("UP", "k"), lambda: self.move_library_selection(-1)),
            KeyComboBinding(("d",), self.delete_library_snippet),
            KeyComboBinding(("r",), self.begin_rename),
        )
        rename_input = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), self.cancel_rename),
            KeyComboBinding(("ENTER",), self.rename_library_snippet),
            KeyComboBinding(("BACKSPACE",), self._pop_title_char),
        )
        return {
            (Mode.NORMAL, Pane.FILE_LIST): tree_pane,
            (Mode.NORMAL, Pane.CONTENT): content_pane,
            (Mode.VISUAL_SELECT, None): visual_select,
            (Mode.TITLE_INPUT, None): title_input,
            (Mode.LIBRARY_BROWSE, None): library_browse,
            (Mode.RENAME_INPUT, None): rename_input,
        }

    def handle_key(self, key: str) -> None:
        """Process one key token.

        Any key clears the pending status message. ``CTRL_C`` exits from every
        mode; other keys go to the active mode's bindings, and text-input modes
        append unbound printable characters to the title buffer.
        """
        self.status_message = None

        if key == "CTRL_C":
            self.exit = True
            return

        pane = self.active_pane if self.mode is Mode.NORMAL else None
        if self._registries[(self.mode, pane)].dispatch(key):
            return
        if self.mode in TEXT_INPUT_MODES and is_printable_key(key):
            self.title_input += key

    def request_exit(self) -> None:
        self.exit = True

    def toggle_pane(self) -> None:
        self.active_pane = Pane.CONTENT if self.active_pane is Pane.FILE_LIST else Pane.FILE_LIST

    def _pop_title_char(self) -> None:
        self.title_input = self.title_input[:-1]

    def reset_to_normal(self) -> None:
        self.mode = Mode.NORMAL
        self.content.visual_anchor = None
        self.title_input = ""

    # -- tree and content ---------------------------------------------------

    def _navigate_tree(self, move: Callable[[], bool]) -> None:
        move()
        self.load_selected_content()

    def select_tree_item(self) -> None:
        """Toggle a selected root, or load the selected file."""
        node = self.tree.selected
        if node is None:
            return
        if isinstance(node, RootNode):
            self.tree.toggle_selected()
            return
        self.load_selected_content()

    def load_selected_content(self) -> None:
        """Load the selected file into the content buffer; roots leave it unchanged."""
        node = self.tree.selected
        if not isinstance(node, FileNode):
            return
        self.content.load_text(self._read_file(node.path))
        self.loaded_node = node

    def current_source(self) -> str:
        """Identity of the file whose text is in the content buffer."""
        if self.loaded_node is not None:
            return self.loaded_node.identity()
        return self.tree.selected_identity()

    # -- selection and saving -----------------------------------------------

    def begin_visual_select(self) -> None:
        self.content.visual_anchor = self.content.cursor
        self.mode = Mode.VISUAL_SELECT

    def cancel_visual_select(self) -> None:
        self.content.visual_anchor = None
        self.mode = Mode.NORMAL

    def begin_title_input(self) -> None:
        self.title_input = ""
        self.mode = Mode.TITLE_INPUT

    def cancel_title_input(self) -> None:
        self.title_input = ""
        self.mode = Mode.VISUAL_SELECT

    def save_current_snippet(self) -> None:
        """Validate the title and selection, then append a snippet to the library.

        An empty title keeps the prompt open. A missing selection or library
        path aborts back to normal mode, as does any write outcome.
        """
        path = self.config.library_path
        if path is None:
            self.status_message = STATUS_NO_LIBRARY_PATH
            self.reset_to_normal()
            return

        title = self.title_input.strip()
        if not title:
            self.status_message = STATUS_EMPTY_TITLE
            return

        selected_text = self.content.selected_text()
        if selected_text is None:
            self.status_message = STATUS_NO_SELECTION
            self.reset_to_normal()
            return

        snippet = Snippet(title=title, content=selected_text, source=self.current_source())
        try:
            library.append_snippet(snippet, path)
        except LibraryError as exc:
            log.warning("save failed: %s", exc)
            self.status_message = f"Save failed: {exc}"
        else:
            log.info("saved snippet %r from %s", title, snippet.source)
            self.status_message = STATUS_SAVED
        self.reset_to_normal()

    # -- library browse -----------------------------------------------------

    def enter_library_browse(self) -> None:
        path = self.config.library_path
        if path is None:
            self.status_message = STATUS_NO_LIBRARY_PATH
            return
        try:
            lib = library.load_library(path)
        except LibraryError as exc:
            self.status_message = f"Failed to load library: {exc}"
            return
        self.library = lib
        self.library_selected = 0
        self.mode = Mode.LIBRARY_BROWSE

    def leave_library_browse(self) -> None:
        self.library = None
        self.mode = Mode.NORMAL

    def library_size(self) -> int:
        return len(self.library) if self.library is not None else 0

    def selected_snippet(self) -> Snippet | None:
        if self.library is None:
            return None
        return self.library.get(self.library_selected)

    def move_library_selection(self, delta: int) -> None:
        last = max(0, self.library_size() - 1)
        self.library_selected = max(0, min(last, self.library_selected + delta))

    def _reload_library(self, path: Path) -> bool:
        """Replace the in-memory view with the stored library; keep the old view on failure."""
        try:
            self.library = library.load_library(path)
        except LibraryError as exc:
            log.warning("library reload failed: %s", exc)
            return False
        return True

    def _clamp_library_selection(self) -> None:
        size = self.library_size()
        if size == 0:
            self.library_selected = 0
        elif self.library_selected >= size:
            self.library_selected = size - 1

    def delete_library_snippet(self) -> None:
        """Delete the selected snippet, reload from storage, and re-clamp the index."""
        path = self.config.library_path
        if path is None:
            self.status_message = STATUS_NO_LIBRARY_PATH
            return
        if self.library_size() == 0:
            return

        try:
            library.delete_snippet(self.library_selected, path)
        except LibraryError as exc:
            log.warning("delete failed: %s", exc)
            self.status_message = f"Delete failed: {exc}"
        else:
            self.status_message = STATUS_DELETED
        self._reload_library(path)
        self._clamp_library_selection()

    def begin_rename(self) -> None:
        snippet = self.selected_snippet()
        if snippet is None:
            return
        self.title_input = snippet.title
        self.mode = Mode.RENAME_INPUT

    def cancel_rename(self) -> None:
        self.title_input = ""
        self.mode = Mode.LIBRARY_BROWSE

    def rename_library_snippet(self) -> None:
        """Rename the selected snippet and return to browse mode.

        The view is reloaded from storage after the attempt whether or not the
        write went through, so it never shows a title that was not persisted.
        """
        path = self.config.library_path
        if path is None:
            self.status_message = STATUS_NO_LIBRARY_PATH
            self.title_input = ""
            self.mode = Mode.LIBRARY_BROWSE
            return

        new_title = self.title_input.strip()
        if not new_title:
            self.status_message = STATUS_EMPTY_TITLE
            return

        try:
            library.rename_snippet(self.library_selected, new_title, path)
        except LibraryError as exc:
            log.warning("rename failed: %s", exc)
            self.status_message = f"Rename failed: {exc}"
        else:
            self.status_message = STATUS_RENAMED
        self._reload_library(path)
        self._clamp_library_selection()
        self.title_input = ""
        self.mode = Mode.LIBRARY_BROWSE
