"""Data models for parsed directory trees."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

ROOT_NAME = "<root>"


class FormatKind(str, Enum):
    """Textual tree notations recognized in clipboard text."""

    tree_glyph = "tree_glyph"
    indentation = "indentation"
    path_list = "path_list"
    content_delimited = "content_delimited"
    none = "none"


@dataclass
class TreeNode:
    """One filesystem entity to create.

    Parents own their children through ``children``; nodes never point back
    at their parent, so a parsed tree cannot contain a cycle.
    """

    name: str
    is_directory: bool = False
    content: str | None = None
    children: list[TreeNode] = field(default_factory=list)

    def add_child(self, child: TreeNode) -> TreeNode:
        self.children.append(child)
        return child

    def child(self, name: str) -> TreeNode | None:
        """Direct child with exactly this name, if any."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def find_file(self, name: str) -> TreeNode | None:
        """Depth-first search for a file node called *name*."""
        for node in self.children:
            if not node.is_directory and node.name == name:
                return node
            if node.is_directory:
                found = node.find_file(name)
                if found is not None:
                    return found
        return None

    def walk(self, prefix: str = "") -> Iterator[tuple[str, TreeNode]]:
        """Yield ``(relative_path, node)`` for every descendant, parents first."""
        for node in self.children:
            path = f"{prefix}/{node.name}" if prefix else node.name
            yield path, node
            if node.is_directory:
                yield from node.walk(path)

    def counts(self) -> tuple[int, int]:
        """Return ``(directories, files)`` below this node."""
        dirs = files = 0
        for _path, node in self.walk():
            if node.is_directory:
                dirs += 1
            else:
                files += 1
        return dirs, files

    @property
    def is_empty(self) -> bool:
        return not self.children


def make_root() -> TreeNode:
    """Synthetic root: never materialized itself, only its children are."""
    return TreeNode(name=ROOT_NAME, is_directory=True)
