"""Hot-swappable configuration snapshots."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from clipboard_to_file.errors import ConfigError

from .loader import LoadedConfig, load_config_report
from .models import ClipToFileConfig, FeatureConfig

logger = logging.getLogger(__name__)


def compile_patterns(patterns: list[str]) -> tuple[re.Pattern[str], ...]:
    """Compile content regexes in order, dropping empty or invalid ones."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        if not pattern:
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning("Ignoring invalid content regex %r: %s", pattern, e)
    return tuple(compiled)


@dataclass(frozen=True)
class ConfigSnapshot:
    """One consistent view of the configuration, with derived values precomputed."""

    config: ClipToFileConfig
    patterns: tuple[re.Pattern[str], ...] = ()
    allowed_extensions: frozenset[str] = frozenset()

    @classmethod
    def from_config(cls, config: ClipToFileConfig) -> ConfigSnapshot:
        # deep copy so later mutation of the caller's model cannot leak in
        config = config.model_copy(deep=True)
        return cls(
            config=config,
            patterns=compile_patterns(config.classifier.content_regexes),
            allowed_extensions=frozenset(config.classifier.allowed_extensions),
        )

    @property
    def features(self) -> FeatureConfig:
        return self.config.features

    @property
    def word_count_limit(self) -> int:
        return self.config.classifier.word_count_limit


@dataclass
class ReloadResult:
    """Outcome of ConfigStore.reload()."""

    ok: bool
    message: str = ""
    bad_extension_lines: int = 0


class ConfigStore:
    """Holds the current ConfigSnapshot behind a lock.

    Readers take one snapshot per top-level call; a reload builds a new
    snapshot off to the side and swaps the reference, so a reader never
    sees a half-updated configuration.
    """

    def __init__(
        self,
        config: ClipToFileConfig | None = None,
        *,
        cli_path: str | None = None,
        loader: Callable[[str | None], LoadedConfig] = load_config_report,
    ) -> None:
        self._lock = threading.Lock()
        self._cli_path = cli_path
        self._loader = loader
        self._source: Path | None = None
        self._extensions_path: Path | None = None
        self._snapshot = ConfigSnapshot.from_config(config or ClipToFileConfig())

    @classmethod
    def load(cls, cli_path: str | None = None) -> ConfigStore:
        """Build a store from the loader, raising ConfigError on a bad file."""
        store = cls(cli_path=cli_path)
        loaded = store._loader(cli_path)
        store._install(loaded)
        return store

    def snapshot(self) -> ConfigSnapshot:
        with self._lock:
            return self._snapshot

    def swap(self, config: ClipToFileConfig) -> ConfigSnapshot:
        snapshot = ConfigSnapshot.from_config(config)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    @property
    def watched_paths(self) -> list[Path]:
        """Files whose changes should trigger a reload."""
        with self._lock:
            paths = [self._source, self._extensions_path]
        return [p for p in paths if p is not None]

    def reload(self) -> ReloadResult:
        """Re-run the loader; keep the last-known-good snapshot on failure."""
        try:
            loaded = self._loader(self._cli_path)
        except (ConfigError, OSError) as e:
            logger.error("Config reload failed, keeping previous settings: %s", e)
            return ReloadResult(ok=False, message=str(e))
        self._install(loaded)
        logger.info("Config reloaded from %s", loaded.source or "defaults")
        if loaded.bad_extension_lines:
            msg = "Settings updated. Some invalid lines were skipped."
        else:
            msg = "Settings have been updated."
        return ReloadResult(ok=True, message=msg, bad_extension_lines=loaded.bad_extension_lines)

    def _install(self, loaded: LoadedConfig) -> None:
        snapshot = ConfigSnapshot.from_config(loaded.config)
        with self._lock:
            self._snapshot = snapshot
            self._source = loaded.source
            self._extensions_path = loaded.extensions_path
