"""Clipboard monitor polling the system clipboard through pyperclip."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import pyperclip

logger = logging.getLogger(__name__)


def read_clipboard() -> str:
    """Current clipboard text, or an empty string when it cannot be read."""
    try:
        return pyperclip.paste() or ""
    except pyperclip.PyperclipException as e:
        logger.warning("Clipboard unavailable: %s", e)
        return ""


class ClipboardMonitor:
    """Polls the clipboard and hands each new text to *callback*.

    Events are delivered one at a time on the polling thread, so a slow
    callback delays the next poll instead of overlapping with it. The
    value present at start-up is the baseline, not an event.
    """

    def __init__(
        self,
        callback: Callable[[str], object],
        poll_interval: float | Callable[[], float] = 0.5,
        paste: Callable[[], str] = pyperclip.paste,
    ) -> None:
        self._callback = callback
        self._interval = poll_interval
        self._paste = paste
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._last: str | None = None

    def _read(self) -> str | None:
        try:
            return self._paste() or ""
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard read failed: %s", e)
            return None

    def _wait_seconds(self) -> float:
        return self._interval() if callable(self._interval) else self._interval

    def poll_once(self) -> bool:
        """Check the clipboard; return True if the callback ran."""
        text = self._read()
        if text is None or text == self._last:
            return False
        first = self._last is None
        self._last = text
        if first:
            return False
        try:
            self._callback(text)
        except Exception:
            logger.exception("Clipboard callback failed")
        return True

    def _run(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self._wait_seconds())

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._last = None
        self.poll_once()
        self._thread = threading.Thread(target=self._run, name="clipboard-monitor", daemon=True)
        self._thread.start()
        logger.info("Watching the clipboard")

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=5)
        self._thread = None
        logger.info("Stopped watching the clipboard")

    @property
    def running(self) -> bool:
        return self._thread is not None
