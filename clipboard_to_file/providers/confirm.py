"""Confirmation sinks: interactive prompts and fixed answers."""

from __future__ import annotations

import logging

import typer

from clipboard_to_file.materialize.models import ConflictAction, coerce_action

logger = logging.getLogger(__name__)

_ANSWERS = {"r": ConflictAction.replace, "s": ConflictAction.skip, "n": ConflictAction.rename}


class ConsoleConfirmer:
    """Asks on the terminal. ``r`` replace, ``s`` skip, ``n`` rename."""

    def confirm_conflict(self, names: list[str]) -> ConflictAction:
        shown = ", ".join(names[:5])
        if len(names) > 5:
            shown += f" and {len(names) - 5} more"
        answer = typer.prompt(
            f"Already exists: {shown}. Replace, skip or rename? [r/s/n]",
            default="s",
        )
        answer = answer.strip().lower()
        if answer in _ANSWERS:
            return _ANSWERS[answer]
        return coerce_action(answer)

    def confirm_large_batch(self, dir_count: int, file_count: int) -> bool:
        return typer.confirm(f"Create {dir_count} folder(s) and {file_count} file(s)?", default=True)


class StaticConfirmer:
    """Answers every question the same way, for unattended runs."""

    def __init__(self, action: ConflictAction | str = ConflictAction.skip, allow_large: bool = True) -> None:
        self.action = coerce_action(action)
        self.allow_large = allow_large

    def confirm_conflict(self, names: list[str]) -> ConflictAction:
        logger.debug("conflict on %s answered %s", names, self.action.value)
        return self.action

    def confirm_large_batch(self, dir_count: int, file_count: int) -> bool:
        return self.allow_large
