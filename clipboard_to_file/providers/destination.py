"""Destination providers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class StaticDestinationProvider:
    """Offers a fixed list of folders; only those that exist are candidates."""

    def __init__(self, paths: Iterable[str | Path]) -> None:
        self.paths = [Path(p).expanduser() for p in paths]

    def resolve_destination(self) -> list[Path]:
        found = [p for p in self.paths if p.is_dir()]
        missing = len(self.paths) - len(found)
        if missing:
            logger.debug("%d configured destination(s) do not exist", missing)
        return found


class CurrentDirectoryProvider:
    """The process's working directory, read at every call."""

    def resolve_destination(self) -> Path:
        return Path.cwd()


def provider_from_paths(paths: Iterable[str | Path]) -> StaticDestinationProvider | CurrentDirectoryProvider:
    paths = list(paths)
    if not paths:
        return CurrentDirectoryProvider()
    return StaticDestinationProvider(paths)
