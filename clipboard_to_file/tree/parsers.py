"""Parsers turning each supported notation into a TreeNode tree.

Every parser takes the text's lines and returns the synthetic root. Lines
that yield no usable name are skipped; a root without children means the
text was not a tree after all.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from clipboard_to_file.tree.detector import detect_format
from clipboard_to_file.tree.models import FormatKind, TreeNode, make_root

logger = logging.getLogger(__name__)

Parser = Callable[[Sequence[str]], TreeNode]

TAB_WIDTH = 4

_GLYPH_PREFIX_RE = re.compile(r"^[ \u00a0│├└─]*")
_COMMENT_RE = re.compile(r"\s+#.*$")
_BULLET_RE = re.compile(r"^[-*+]\s+")
_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_START_RE = re.compile(r"^\s*---START:\s*(.+?)\s*---\s*$")
_END_RE = re.compile(r"^\s*---END:\s*(.+?)\s*---\s*$")


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith("```")


def _split_label(label: str) -> tuple[str, bool] | None:
    """Strip annotations from a label; return ``(name, is_directory)``."""
    label = _COMMENT_RE.sub("", label).strip()
    is_dir = label.endswith(("/", "\\"))
    name = label.rstrip("/\\").strip()
    if not name:
        return None
    return name, is_dir


def _promote_parents(entries: list[tuple[int, str, bool]]) -> list[tuple[int, str, bool]]:
    """Mark an entry as a directory when the entry after it is deeper."""
    result = []
    for i, (depth, name, is_dir) in enumerate(entries):
        if not is_dir and i + 1 < len(entries) and entries[i + 1][0] > depth:
            is_dir = True
        result.append((depth, name, is_dir))
    return result


def _build_by_depth(entries: list[tuple[int, str, bool]]) -> TreeNode:
    root = make_root()
    # (node, depth) of every open directory; the root sits below any real depth
    stack: list[tuple[TreeNode, int]] = [(root, -1)]
    for depth, name, is_dir in _promote_parents(entries):
        while stack[-1][1] >= depth:
            stack.pop()
        node = stack[-1][0].add_child(TreeNode(name=name, is_directory=is_dir))
        if is_dir:
            stack.append((node, depth))
    return root


def parse_tree_glyph(lines: Sequence[str]) -> TreeNode:
    """Parse ``tree``-command style output drawn with box glyphs."""
    entries: list[tuple[int, str, bool]] = []
    for raw in lines:
        line = raw.replace("\t", " " * TAB_WIDTH).rstrip()
        if not line.strip() or _is_fence(line):
            continue
        prefix = _GLYPH_PREFIX_RE.match(line).group(0)
        parsed = _split_label(line[len(prefix):])
        if parsed is None:
            continue
        # each level is drawn four columns wide; short connectors round up
        depth = (len(prefix) + TAB_WIDTH - 1) // TAB_WIDTH
        entries.append((depth, *parsed))
    return _build_by_depth(entries)


def _indent_width(line: str) -> int:
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH
        else:
            break
    return width


def parse_indentation(lines: Sequence[str]) -> TreeNode:
    """Parse a whitespace-indented outline, one entry per line."""
    entries: list[tuple[int, str, bool]] = []
    for line in lines:
        if not line.strip() or _is_fence(line):
            continue
        label = _BULLET_RE.sub("", line.strip())
        parsed = _split_label(label)
        if parsed is None:
            continue
        entries.append((_indent_width(line), *parsed))
    return _build_by_depth(entries)


def _add_path(root: TreeNode, parts: Sequence[str], *, leaf_is_dir: bool) -> TreeNode:
    """Walk *parts* below *root*, creating missing nodes; return the leaf."""
    node = root
    for part in parts[:-1]:
        existing = node.child(part)
        if existing is None:
            existing = node.add_child(TreeNode(name=part, is_directory=True))
        else:
            existing.is_directory = True
        node = existing
    leaf = node.child(parts[-1])
    if leaf is None:
        leaf = node.add_child(TreeNode(name=parts[-1], is_directory=leaf_is_dir))
    return leaf


def _path_parts(path: str) -> list[str]:
    path = path.replace("\\", "/")
    return [part for part in path.split("/") if part and part != "."]


def parse_path_list(lines: Sequence[str]) -> TreeNode:
    """Parse one slash-separated relative path per line."""
    root = make_root()
    for raw in lines:
        line = _COMMENT_RE.sub("", raw).strip()
        if not line or _is_fence(line):
            continue
        if line.startswith(("/", "\\")) or _DRIVE_RE.match(line):
            logger.warning("Skipping absolute path %r", line)
            continue
        parts = _path_parts(line)
        if not parts:
            continue
        leaf = parts[-1]
        # ".env" has no extension; "notes.md" does
        is_file = not line.endswith(("/", "\\")) and "." in leaf[1:]
        _add_path(root, parts, leaf_is_dir=not is_file)
    return root


def _locate_file(root: TreeNode, name: str) -> TreeNode | None:
    parts = _path_parts(name)
    if not parts:
        return None
    if len(parts) == 1:
        return root.find_file(parts[0])
    node: TreeNode | None = root
    for part in parts:
        node = node.child(part) if node is not None else None
    if node is None or node.is_directory:
        return None
    return node


def parse_content_delimited(lines: Sequence[str]) -> TreeNode:
    """Parse a tree followed by ``---START:name---`` / ``---END:name---`` bodies."""
    scaffold: list[str] = []
    regions: list[tuple[str, str]] = []
    current: str | None = None
    body: list[str] = []

    for line in lines:
        if current is None:
            start = _START_RE.match(line)
            if start:
                current, body = start.group(1), []
            elif not _END_RE.match(line):
                scaffold.append(line)
            continue
        end = _END_RE.match(line)
        if end is None:
            body.append(line)
            continue
        if end.group(1) != current:
            logger.warning("END marker %r closes START marker %r", end.group(1), current)
        regions.append((current, "\n".join(body)))
        current = None

    if current is not None:
        logger.warning("Dropping unterminated content block for %r", current)

    kind = detect_format("\n".join(scaffold))
    scaffold_parser = PARSERS.get(kind, parse_indentation)
    if scaffold_parser is parse_content_delimited:
        scaffold_parser = parse_indentation
    root = scaffold_parser(scaffold)

    for name, content in regions:
        node = _locate_file(root, name)
        if node is None:
            parts = _path_parts(name)
            if not parts:
                logger.debug("Content block %r has no usable name", name)
                continue
            node = _add_path(root, parts, leaf_is_dir=False)
            if node.is_directory:
                logger.warning("Content block %r names a directory", name)
                continue
        node.content = content
    return root


PARSERS: dict[FormatKind, Parser] = {
    FormatKind.tree_glyph: parse_tree_glyph,
    FormatKind.indentation: parse_indentation,
    FormatKind.path_list: parse_path_list,
    FormatKind.content_delimited: parse_content_delimited,
}


def parse_tree(text: str, kind: FormatKind | None = None) -> TreeNode | None:
    """Detect (unless given) and parse *text*; None when it holds no tree."""
    if kind is None:
        kind = detect_format(text)
    parser = PARSERS.get(kind)
    if parser is None:
        return None
    root = parser(text.splitlines())
    if root.is_empty:
        logger.debug("%s text produced an empty tree", kind.value)
        return None
    return root
