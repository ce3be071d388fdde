"""Heuristic classification of freeform clipboard text into filenames."""

from clipboard_to_file.classify.batch import expand_batch
from clipboard_to_file.classify.classifier import classify
from clipboard_to_file.classify.models import Classification, ClassificationTier, ClassifiedEntry

__all__ = [
    "Classification",
    "ClassificationTier",
    "ClassifiedEntry",
    "classify",
    "expand_batch",
]
