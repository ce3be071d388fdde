"""Clipboard to File - create files and folder trees from clipboard text."""

from clipboard_to_file.errors import (
    ClipToFileError,
    ConfigError,
    InvalidNameError,
    MaterializeError,
    NoDestinationError,
    PathUnsafeError,
)
from clipboard_to_file.config import ClipToFileConfig, ConfigStore, load_config
from clipboard_to_file.tree import FormatKind, TreeNode, detect_format, parse_tree
from clipboard_to_file.classify import ClassifiedEntry, classify, expand_batch
from clipboard_to_file.materialize import ConflictAction, Materializer, MaterializeReport
from clipboard_to_file.engine import ClipboardProcessor, ProcessResult

__version__ = "0.1.0"
