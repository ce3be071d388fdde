"""Classify clipboard text into one of the supported tree notations."""

from __future__ import annotations

from clipboard_to_file.tree.models import FormatKind

TREE_GLYPHS = ("├", "└", "│")  # ├ └ │
START_MARKER = "---START:"
END_MARKER = "---END:"


def detect_format(text: str) -> FormatKind:
    """Return the notation *text* is written in.

    Glyph and content markers are unambiguous, so they win over the
    line-shape checks. An indented path-like line is still an indentation
    tree, so indentation is checked before slashes.
    """
    if any(glyph in text for glyph in TREE_GLYPHS):
        return FormatKind.tree_glyph
    if START_MARKER in text or END_MARKER in text:
        return FormatKind.content_delimited

    lines = [line for line in text.splitlines() if line.strip()]
    if any(line[0] in " \t" for line in lines):
        return FormatKind.indentation
    if any("/" in line or "\\" in line for line in lines):
        return FormatKind.path_list
    return FormatKind.none
