"""Tree subsystem: notation detection and parsing into TreeNode trees."""

from clipboard_to_file.tree.detector import detect_format
from clipboard_to_file.tree.models import ROOT_NAME, FormatKind, TreeNode, make_root
from clipboard_to_file.tree.parsers import (
    PARSERS,
    parse_content_delimited,
    parse_indentation,
    parse_path_list,
    parse_tree,
    parse_tree_glyph,
)

__all__ = [
    "FormatKind",
    "PARSERS",
    "ROOT_NAME",
    "TreeNode",
    "detect_format",
    "make_root",
    "parse_content_delimited",
    "parse_indentation",
    "parse_path_list",
    "parse_tree",
    "parse_tree_glyph",
]
