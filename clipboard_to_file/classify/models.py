"""Data models for the heuristic filename classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ClassificationTier(str, Enum):
    """Which heuristic produced a classification, in priority order."""

    regex = "regex"
    leading_word = "leading_word"
    word_count = "word_count"


@dataclass(frozen=True)
class ClassifiedEntry:
    """A file to create. Empty content means an empty file."""

    filename: str
    content: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.content)


@dataclass(frozen=True)
class Classification:
    """Result of classifying freeform clipboard text."""

    entry: ClassifiedEntry
    tier: ClassificationTier
    # lines of the clipboard text, first line included; the batch expander reads these
    lines: tuple[str, ...] = ()
