"""Concrete collaborators: clipboard, destinations, notifications, prompts."""

from clipboard_to_file.providers.clipboard import ClipboardMonitor, read_clipboard
from clipboard_to_file.providers.confirm import ConsoleConfirmer, StaticConfirmer
from clipboard_to_file.providers.destination import (
    CurrentDirectoryProvider,
    StaticDestinationProvider,
    provider_from_paths,
)
from clipboard_to_file.providers.notify import ConsoleNotifier, LoggingNotifier

__all__ = [
    "ClipboardMonitor",
    "ConsoleConfirmer",
    "ConsoleNotifier",
    "CurrentDirectoryProvider",
    "LoggingNotifier",
    "StaticConfirmer",
    "StaticDestinationProvider",
    "provider_from_paths",
    "read_clipboard",
]
