"""Collaborator interfaces the engine talks to.

The clipboard itself, the destination lookup, user notifications and
confirmation prompts are platform glue; the engine only sees these
protocols.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clipboard_to_file.materialize.models import ConflictAction


class Severity(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


@runtime_checkable
class NotificationSink(Protocol):
    """Fire-and-forget user notifications."""

    def notify(self, title: str, message: str, severity: Severity = Severity.info) -> None: ...


@runtime_checkable
class ConfirmationSink(Protocol):
    """Blocking questions for the user.

    ``confirm_conflict`` may return a ConflictAction or its string value;
    anything else is treated as skip.
    """

    def confirm_conflict(self, names: list[str]) -> ConflictAction | str: ...

    def confirm_large_batch(self, dir_count: int, file_count: int) -> bool: ...


@runtime_checkable
class DestinationProvider(Protocol):
    """Candidate destination directories; the engine needs exactly one."""

    def resolve_destination(self) -> list[Path] | Path | None: ...
