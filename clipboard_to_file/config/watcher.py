"""Config file watcher with debounce, driving hot reloads."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class _DebouncedHandler(FileSystemEventHandler):
    """Buffers rapid events for the watched names and fires after a quiet period."""

    def __init__(
        self,
        names: set[str],
        debounce_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        super().__init__()
        self._names = names
        self._debounce = debounce_seconds
        self._callback = callback
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def matches(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(str(p)).name.lower() in self._names for p in paths)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if not self.matches(event):
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        try:
            self._callback()
        except Exception:
            logger.exception("Config reload callback failed")

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ConfigWatcher:
    """Watches config files and calls back once per burst of changes.

    Editors often save through a temp file plus rename, so both the source
    and destination of move events are matched by file name.
    """

    def __init__(
        self,
        paths: Iterable[Path],
        callback: Callable[[], None],
        debounce_seconds: float = 0.5,
    ) -> None:
        self._paths = [Path(p).resolve() for p in paths]
        names = {p.name.lower() for p in self._paths}
        self._handler = _DebouncedHandler(names, debounce_seconds, callback)
        self._observer: Observer | None = None

    @property
    def directories(self) -> list[Path]:
        seen: list[Path] = []
        for p in self._paths:
            if p.parent not in seen:
                seen.append(p.parent)
        return seen

    def start(self) -> None:
        """Begin watching the directories holding the config files."""
        if self._observer is not None:
            return
        dirs = [d for d in self.directories if d.is_dir()]
        if not dirs:
            logger.debug("No config directories to watch")
            return
        self._observer = Observer()
        for directory in dirs:
            self._observer.schedule(self._handler, str(directory), recursive=False)
        self._observer.start()
        logger.info("Watching %s for config changes", ", ".join(str(p) for p in self._paths))

    def stop(self) -> None:
        """Stop watching and clean up."""
        self._handler.cancel()
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Stopped watching config files")
