"""Shared test fixtures for clipboard-to-file."""

from __future__ import annotations

from pathlib import Path

import pytest

from clipboard_to_file.config.models import ClassifierConfig, ClipToFileConfig, FeatureConfig
from clipboard_to_file.config.store import ConfigSnapshot, ConfigStore
from clipboard_to_file.interfaces import Severity
from clipboard_to_file.materialize.models import ConflictAction


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Severity]] = []

    def notify(self, title: str, message: str, severity: Severity = Severity.info) -> None:
        self.calls.append((title, message, severity))

    @property
    def titles(self) -> list[str]:
        return [c[0] for c in self.calls]


class RecordingConfirmer:
    def __init__(self, action: ConflictAction | str = ConflictAction.skip, allow_large: bool = True) -> None:
        self.action = action
        self.allow_large = allow_large
        self.conflicts: list[list[str]] = []
        self.large: list[tuple[int, int]] = []

    def confirm_conflict(self, names: list[str]):
        self.conflicts.append(list(names))
        return self.action

    def confirm_large_batch(self, dir_count: int, file_count: int) -> bool:
        self.large.append((dir_count, file_count))
        return self.allow_large


class FixedDestination:
    def __init__(self, result) -> None:
        self.result = result

    def resolve_destination(self):
        return self.result


def build_snapshot(features: dict | None = None, **classifier) -> ConfigSnapshot:
    """Snapshot with overrides, e.g. build_snapshot(word_count_limit=2)."""
    config = ClipToFileConfig(
        classifier=ClassifierConfig(**classifier),
        features=FeatureConfig(**(features or {})),
    )
    return ConfigSnapshot.from_config(config)


@pytest.fixture
def sample_config():
    return ClipToFileConfig()


@pytest.fixture
def snapshot(sample_config):
    return ConfigSnapshot.from_config(sample_config)


@pytest.fixture
def store(sample_config):
    return ConfigStore(sample_config)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def confirmer():
    return RecordingConfirmer()


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    """An empty destination folder."""
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def fixed_destination():
    return FixedDestination
