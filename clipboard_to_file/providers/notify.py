"""Notification sinks."""

from __future__ import annotations

import logging

from rich.console import Console

from clipboard_to_file.interfaces import Severity

logger = logging.getLogger(__name__)

_LEVELS = {
    Severity.info: logging.INFO,
    Severity.warning: logging.WARNING,
    Severity.error: logging.ERROR,
}

_STYLES = {
    Severity.info: "green",
    Severity.warning: "yellow",
    Severity.error: "red",
}


class LoggingNotifier:
    """Sends notifications to the log."""

    def notify(self, title: str, message: str, severity: Severity = Severity.info) -> None:
        logger.log(_LEVELS.get(severity, logging.INFO), "%s: %s", title, message)


class ConsoleNotifier:
    """Prints notifications with rich markup."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def notify(self, title: str, message: str, severity: Severity = Severity.info) -> None:
        style = _STYLES.get(severity, "white")
        self.console.print(f"[{style}]{title}:[/{style}] {message}", highlight=False)
