"""Priority chain that pulls a filename (and content) out of freeform text."""

from __future__ import annotations

import logging

from clipboard_to_file.classify.models import Classification, ClassificationTier, ClassifiedEntry
from clipboard_to_file.config.store import ConfigSnapshot
from clipboard_to_file.validation import is_candidate_filename

logger = logging.getLogger(__name__)


def _split_first_line(text: str) -> tuple[str, str]:
    first, _, rest = text.partition("\n")
    return first.strip(), rest


def _feature_allows(snapshot: ConfigSnapshot, entry: ClassifiedEntry) -> bool:
    features = snapshot.features
    return features.create_with_content if entry.has_content else features.create_empty


def _match_regex(first_line: str, rest: str, snapshot: ConfigSnapshot) -> ClassifiedEntry | None:
    """Priority 1: the first configured pattern whose group 1 captures a name."""
    for pattern in snapshot.patterns:
        if pattern.groups < 1:
            continue
        m = pattern.fullmatch(first_line)
        if m is None or not m.group(1):
            continue
        logger.debug("content regex %r matched %r", pattern.pattern, first_line)
        return ClassifiedEntry(filename=m.group(1).strip(), content=rest)
    return None


def _match_leading_word(first_line: str, snapshot: ConfigSnapshot) -> ClassifiedEntry | None:
    """Priority 2: ``notes.md some text`` on a single line."""
    parts = first_line.split(None, 1)
    if len(parts) < 2:
        return None
    name, trailing = parts[0], parts[1].lstrip()
    limit = snapshot.word_count_limit
    if not is_candidate_filename(name, snapshot.allowed_extensions, limit):
        return None
    # a line made only of filenames is a batch list, not a file with content
    if all(is_candidate_filename(tok, snapshot.allowed_extensions, limit) for tok in trailing.split()):
        return None
    return ClassifiedEntry(filename=name, content=trailing)


def _match_word_count(first_line: str, snapshot: ConfigSnapshot) -> ClassifiedEntry | None:
    """Priority 3: the whole first line is the name of an empty file."""
    if not is_candidate_filename(first_line, snapshot.allowed_extensions, snapshot.word_count_limit):
        return None
    return ClassifiedEntry(filename=first_line)


def classify(text: str, snapshot: ConfigSnapshot) -> Classification | None:
    """Run the priority chain over *text*; None when nothing looks like a filename.

    Tiers are tried in a fixed order and the first one that yields an
    entry the enabled features allow wins; lower tiers are not consulted.
    """
    features = snapshot.features
    if not (features.create_empty or features.create_with_content):
        return None

    text = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not text:
        return None
    first_line, rest = _split_first_line(text)
    lines = tuple(text.split("\n"))

    tiers = [(ClassificationTier.regex, lambda: _match_regex(first_line, rest, snapshot))]
    if "\n" not in text:
        tiers.append((ClassificationTier.leading_word, lambda: _match_leading_word(first_line, snapshot)))
    tiers.append((ClassificationTier.word_count, lambda: _match_word_count(first_line, snapshot)))

    for tier, attempt in tiers:
        entry = attempt()
        if entry is None:
            continue
        if not _feature_allows(snapshot, entry):
            logger.debug("%s match %r rejected: feature disabled", tier.value, entry.filename)
            continue
        logger.debug("classified %r via %s", entry.filename, tier.value)
        return Classification(entry=entry, tier=tier, lines=lines)
    return None
