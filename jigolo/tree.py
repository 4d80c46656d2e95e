"""File-tree navigator over discovered source roots.

Each root is a collapsible node whose children are its context files. Node
identity is a closed variant (``RootNode`` or ``FileNode``) so the session
never has to guess what kind of row is selected.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .discovery import SourceRoot


@dataclass(frozen=True)
class RootNode:
    """A root directory row."""

    root: Path

    def identity_segments(self) -> tuple[str, ...]:
        return (str(self.root),)

    def identity(self) -> str:
        return str(self.root)


@dataclass(frozen=True)
class FileNode:
    """A context-file row nested under ``root``."""

    root: Path
    path: Path

    def identity_segments(self) -> tuple[str, ...]:
        return (str(self.root), str(self.path))

    def identity(self) -> str:
        return str(self.path)


TreeNode = Union[RootNode, FileNode]


@dataclass(frozen=True)
class TreeRow:
    """One visible tree line for the renderer."""

    node: TreeNode
    depth: int
    label: str
    is_open: bool = False


class TreeNavigator:
    """Selection and open/closed state for a forest of ``SourceRoot`` nodes."""

    def __init__(self, roots: list[SourceRoot]) -> None:
        seen: set[Path] = set()
        unique: list[SourceRoot] = []
        for root in roots:
            if root.path in seen:
                continue
            seen.add(root.path)
            unique.append(root)
        self.roots: tuple[SourceRoot, ...] = tuple(unique)
        self._by_path = {root.path: root for root in self.roots}
        self.opened: set[Path] = {root.path for root in self.roots}
        self.selected: TreeNode | None = None
        self._select_initial()

    def _select_initial(self) -> None:
        """Select the first file of the first root, else the first visible row."""
        if self.roots and self.roots[0].files:
            first = self.roots[0]
            self.selected = FileNode(first.path, first.files[0])
        else:
            self.select_first()

    def visible_nodes(self) -> list[TreeNode]:
        nodes: list[TreeNode] = []
        for root in self.roots:
            nodes.append(RootNode(root.path))
            if root.path in self.opened:
                nodes.extend(FileNode(root.path, file_path) for file_path in root.files)
        return nodes

    def rows(self) -> list[TreeRow]:
        """Return visible rows with display labels and depth."""
        out: list[TreeRow] = []
        for root in self.roots:
            is_open = root.path in self.opened
            out.append(TreeRow(RootNode(root.path), 0, str(root.path), is_open=is_open))
            if is_open:
                out.extend(
                    TreeRow(FileNode(root.path, file_path), 1, root.relative_label(file_path))
                    for file_path in root.files
                )
        return out

    def selected_index(self) -> int | None:
        if self.selected is None:
            return None
        try:
            return self.visible_nodes().index(self.selected)
        except ValueError:
            return None

    def select(self, node: TreeNode) -> bool:
        """Select ``node`` when it exists in the forest; return whether selection changed."""
        root = self._by_path.get(node.root)
        if root is None:
            return False
        if isinstance(node, FileNode) and node.path not in root.files:
            return False
        changed = node != self.selected
        self.selected = node
        return changed

    def select_first(self) -> bool:
        nodes = self.visible_nodes()
        if not nodes:
            self.selected = None
            return False
        return self.select(nodes[0])

    def is_open(self, root: Path) -> bool:
        return root in self.opened

    def open(self, root: Path) -> bool:
        if root in self.opened or root not in self._by_path:
            return False
        self.opened.add(root)
        return True

    def close(self, root: Path) -> bool:
        if root not in self.opened:
            return False
        self.opened.discard(root)
        return True

    def toggle_selected(self) -> bool:
        """Open or close the selected root; file rows are left alone."""
        node = self.selected
        if not isinstance(node, RootNode):
            return False
        if node.root in self.opened:
            return self.close(node.root)
        return self.open(node.root)

    def _move(self, delta: int) -> bool:
        nodes = self.visible_nodes()
        if not nodes:
            return False
        idx = self.selected_index()
        if idx is None:
            return self.select(nodes[0])
        target = max(0, min(len(nodes) - 1, idx + delta))
        if target == idx:
            return False
        return self.select(nodes[target])

    def key_down(self) -> bool:
        return self._move(1)

    def key_up(self) -> bool:
        return self._move(-1)

    def key_left(self) -> bool:
        """Collapse an open root, or jump from a file to its root."""
        node = self.selected
        if isinstance(node, FileNode):
            return self.select(RootNode(node.root))
        if isinstance(node, RootNode):
            return self.close(node.root)
        return False

    def key_right(self) -> bool:
        """Expand a closed root, or step into the first file of an open root."""
        node = self.selected
        if not isinstance(node, RootNode):
            return False
        if node.root not in self.opened:
            return self.open(node.root)
        root = self._by_path[node.root]
        if not root.files:
            return False
        return self.select(FileNode(root.path, root.files[0]))

    def selected_file(self) -> Path | None:
        if isinstance(self.selected, FileNode):
            return self.selected.path
        return None

    def selected_identity(self) -> str:
        """Identity string of the selected node; empty when nothing is selected."""
        if self.selected is None:
            return ""
        return self.selected.identity()
