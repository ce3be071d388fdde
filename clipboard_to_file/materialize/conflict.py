"""Conflict resolution: one decision per operation, unique renames, atomic replace."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from clipboard_to_file.errors import MaterializeError
from clipboard_to_file.interfaces import ConfirmationSink
from clipboard_to_file.materialize.models import ConflictAction, coerce_action

logger = logging.getLogger(__name__)


def _with_suffix(filename: str, suffix: str) -> str:
    """Insert *suffix* before the extension of *filename*."""
    idx = filename.rfind(".")
    if idx <= 0:
        return filename + suffix
    return filename[:idx] + suffix + filename[idx:]


def unique_path(target: Path, max_attempts: int = 1000) -> Path:
    """First free ``name (n).ext`` next to *target*."""
    for n in range(1, max_attempts + 1):
        candidate = target.with_name(_with_suffix(target.name, f" ({n})"))
        if not os.path.lexists(candidate):
            return candidate
    raise MaterializeError(
        str(target),
        "rename",
        FileExistsError(f"no free name after {max_attempts} attempts"),
    )


def temp_sibling(target: Path, max_attempts: int = 100) -> Path:
    """First free ``name_tmp_<n>.ext`` in the target's directory."""
    for n in range(max_attempts):
        candidate = target.with_name(_with_suffix(target.name, f"_tmp_{n}"))
        if not os.path.lexists(candidate):
            return candidate
    raise MaterializeError(
        str(target),
        "replace",
        FileExistsError(f"no free temp name after {max_attempts} attempts"),
    )


def write_new(target: Path, content: str | None) -> None:
    """Create *target*, failing if anything already exists there."""
    with open(target, "x", encoding="utf-8") as f:
        if content:
            f.write(content)


def atomic_replace(target: Path, content: str | None, max_attempts: int = 100) -> None:
    """Replace *target* so readers only ever see the old or the complete new file.

    The new content goes to a sibling temp file which is then moved over the
    target. On failure the temp file is removed and the target is untouched.
    """
    tmp = temp_sibling(target, max_attempts)
    try:
        with open(tmp, "x", encoding="utf-8") as f:
            if content:
                f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, target)
    except OSError as e:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.warning("could not remove temp file %s", tmp)
        raise MaterializeError(str(target), "replace", e) from e
    logger.debug("replaced %s via %s", target, tmp.name)


class ConflictResolver:
    """Asks the confirmation sink once and reuses the answer for the operation."""

    def __init__(self, confirm: ConfirmationSink) -> None:
        self._confirm = confirm
        self._decision: ConflictAction | None = None

    @property
    def decision(self) -> ConflictAction | None:
        return self._decision

    def decide(self, names: list[str]) -> ConflictAction:
        if self._decision is None:
            answer = self._confirm.confirm_conflict(list(names))
            self._decision = coerce_action(answer)
            logger.info("conflict on %d item(s): %s", len(names), self._decision.value)
        return self._decision
