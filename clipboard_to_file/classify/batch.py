"""Expand a single classified filename into a multi-file batch."""

from __future__ import annotations

import logging

from clipboard_to_file.classify.models import Classification
from clipboard_to_file.config.store import ConfigSnapshot
from clipboard_to_file.validation import is_candidate_filename

logger = logging.getLogger(__name__)


def _dedupe(names: list[str]) -> list[str]:
    seen: list[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


def expand_batch(classification: Classification, snapshot: ConfigSnapshot) -> list[str]:
    """Return every filename the clipboard text lists, the classified one first.

    A line of space-separated filenames, either the classified line itself
    or the one right after it, replaces the single match.
    Otherwise following lines are collected until one is not a filename;
    blank lines in between are skipped. Entries with content never expand.
    """
    entry = classification.entry
    if entry.has_content or not classification.lines:
        return [entry.filename]

    allowed = snapshot.allowed_extensions
    limit = snapshot.word_count_limit

    for line in classification.lines[:2]:
        tokens = line.split()
        if len(tokens) > 1 and all(is_candidate_filename(tok, allowed, limit) for tok in tokens):
            logger.debug("line is a list of %d filenames", len(tokens))
            return _dedupe(tokens)

    names = [entry.filename]
    for line in classification.lines[1:]:
        candidate = line.strip()
        if not candidate:
            continue
        if not is_candidate_filename(candidate, allowed, limit):
            logger.debug("batch scan stopped at %r", candidate)
            break
        names.append(candidate)
    return _dedupe(names)
