"""Filename and relative-path safety checks.

Everything here is pure: no filesystem access, no configuration reads.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

MAX_NAME_UNITS = 255

# Characters that are never legal inside a single path segment.
INVALID_NAME_CHARS = frozenset('\\/:*?"<>|')

_RESERVED_RE = re.compile(r"(CON|PRN|AUX|NUL|COM\d+|LPT\d+)", re.IGNORECASE)
_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_TRAVERSAL = ("../", "..\\")


def _utf16_units(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def filename_problem(name: str) -> str | None:
    """Return why *name* is not a safe single path segment, or None if it is."""
    if not name:
        return "name is empty"
    if _utf16_units(name) > MAX_NAME_UNITS:
        return f"name is longer than {MAX_NAME_UNITS} characters"
    if any(sep in name for sep in _TRAVERSAL):
        return "name contains a path traversal sequence"
    if name.startswith("\\\\"):
        return "name is a UNC path"
    if _DRIVE_RE.match(name) or name[0] in "/\\":
        return "name starts with a drive or path separator"
    bad = sorted({ch for ch in name if ch in INVALID_NAME_CHARS})
    if bad:
        return f"name contains invalid characters: {' '.join(bad)}"
    if any(ord(ch) < 0x20 for ch in name):
        return "name contains control characters"
    if name.strip(".") == "":
        return "name consists only of dots"
    if name.endswith("."):
        return "name ends with a dot"
    # Windows treats everything before the first dot as the device name.
    stem = name.split(".", 1)[0].rstrip(" ")
    if _RESERVED_RE.fullmatch(stem):
        return f"{stem.upper()} is a reserved device name"
    return None


def is_valid_filename(name: str) -> bool:
    return filename_problem(name) is None


def is_path_safe(path: str) -> bool:
    """Reject relative paths that could resolve outside the destination root."""
    if any(seq in path for seq in _TRAVERSAL):
        return False
    if path.startswith(("/", "\\")) or _DRIVE_RE.match(path):
        return False
    parts = re.split(r"[\\/]", path)
    return ".." not in parts


def extension_of(name: str) -> str:
    """Lower-cased extension including the dot; ``.gitignore`` is its own extension."""
    idx = name.rfind(".")
    if idx == -1:
        return ""
    return name[idx:].lower()


def has_allowed_extension(name: str, allowed: Iterable[str]) -> bool:
    ext = extension_of(name)
    return bool(ext) and ext in allowed


def word_count(text: str) -> int:
    return len(text.split())


def is_candidate_filename(name: str, allowed: Iterable[str], word_limit: int) -> bool:
    """A valid segment with an allowed extension and at most *word_limit* words."""
    return (
        is_valid_filename(name)
        and has_allowed_extension(name, allowed)
        and word_count(name) <= word_limit
    )
