"""Pydantic models for materialization outcomes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ConflictAction(str, Enum):
    """What to do with targets that already exist, decided once per operation."""

    replace = "replace"
    skip = "skip"
    rename = "rename"


def coerce_action(value: object) -> ConflictAction:
    """Map a confirmation answer onto an action; anything unrecognized is skip."""
    if isinstance(value, ConflictAction):
        return value
    if isinstance(value, str):
        try:
            return ConflictAction(value.strip().lower())
        except ValueError:
            pass
    return ConflictAction.skip


class FailureKind(str, Enum):
    invalid_name = "invalid_name"
    path_unsafe = "path_unsafe"
    io_failure = "io_failure"


class Failure(BaseModel):
    """One entity that could not be created."""

    path: str
    kind: FailureKind
    reason: str


class MaterializeReport(BaseModel):
    """Everything one materialization did, in relative paths."""

    created: list[str] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    replaced: list[str] = Field(default_factory=list)
    renamed: dict[str, str] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
    failures: list[Failure] = Field(default_factory=list)
    action: ConflictAction | None = None
    aborted: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures and not self.aborted

    @property
    def written(self) -> int:
        """Files that now hold new content."""
        return len(self.created) + len(self.replaced) + len(self.renamed)

    def fail(self, path: str, kind: FailureKind, reason: str) -> None:
        self.failures.append(Failure(path=path, kind=kind, reason=reason))

    def summary(self) -> str:
        parts = []
        if self.created:
            parts.append(f"{len(self.created)} file(s) created")
        if self.directories:
            parts.append(f"{len(self.directories)} folder(s) created")
        if self.replaced:
            parts.append(f"{len(self.replaced)} replaced")
        if self.renamed:
            parts.append(f"{len(self.renamed)} renamed")
        if self.skipped:
            parts.append(f"{len(self.skipped)} skipped")
        if self.failures:
            parts.append(f"{len(self.failures)} failed")
        return ", ".join(parts) or "nothing to do"
