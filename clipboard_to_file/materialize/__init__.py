"""Materialize subsystem: writes trees and files with conflict handling."""

from clipboard_to_file.materialize.conflict import (
    ConflictResolver,
    atomic_replace,
    temp_sibling,
    unique_path,
)
from clipboard_to_file.materialize.materializer import Materializer
from clipboard_to_file.materialize.models import (
    ConflictAction,
    Failure,
    FailureKind,
    MaterializeReport,
    coerce_action,
)

__all__ = [
    "ConflictAction",
    "ConflictResolver",
    "Failure",
    "FailureKind",
    "MaterializeReport",
    "Materializer",
    "atomic_replace",
    "coerce_action",
    "temp_sibling",
    "unique_path",
]
