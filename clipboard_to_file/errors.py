"""Exception types raised by the classification and materialization engine."""

from __future__ import annotations


class ClipToFileError(Exception):
    """Base class for every error the engine reports to the user."""


class InvalidNameError(ClipToFileError):
    """A candidate name is not a legal, safe single path segment."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid filename {name!r}: {reason}")


class PathUnsafeError(ClipToFileError):
    """A relative path would escape the destination root."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path escape detected: {path!r}")


class NoDestinationError(ClipToFileError):
    """No single, unambiguous destination directory is available."""

    def __init__(self, candidates: int = 0) -> None:
        self.candidates = candidates
        if candidates:
            msg = f"{candidates} candidate destinations, expected exactly one"
        else:
            msg = "No destination directory available"
        super().__init__(msg)


class MaterializeError(ClipToFileError):
    """Wraps an OS-level failure while creating, writing or moving an entity."""

    def __init__(self, path: str, operation: str, cause: Exception) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"{operation} failed for {path}: {cause}")
        self.__cause__ = cause


class ConfigError(ClipToFileError, ValueError):
    """Configuration file could not be parsed or failed validation."""
