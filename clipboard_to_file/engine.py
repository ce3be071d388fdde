"""ClipboardProcessor: turns one clipboard payload into files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from clipboard_to_file.classify import ClassifiedEntry, classify, expand_batch
from clipboard_to_file.config.store import ConfigSnapshot, ConfigStore
from clipboard_to_file.errors import ClipToFileError, NoDestinationError
from clipboard_to_file.interfaces import (
    ConfirmationSink,
    DestinationProvider,
    NotificationSink,
    Severity,
)
from clipboard_to_file.materialize import Materializer, MaterializeReport
from clipboard_to_file.tree import FormatKind, detect_format, parse_tree

logger = logging.getLogger(__name__)

Mode = Literal["none", "tree", "single", "batch"]


class ProcessResult(BaseModel):
    """What happened for one clipboard event."""

    mode: Mode = "none"
    format: FormatKind = FormatKind.none
    destination: str | None = None
    report: MaterializeReport | None = None
    reason: str = ""
    failed: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed and (self.report is None or self.report.ok)


def normalize_text(text: str) -> str:
    """Unify line endings, drop leading blank lines and trailing whitespace."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").rstrip()
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    return "\n".join(lines)


def resolve_single_destination(
    provider: DestinationProvider, policy: Literal["single", "first"] = "single"
) -> Path | None:
    """Exactly one candidate, or the first one under the ``first`` policy."""
    found = provider.resolve_destination()
    if found is None:
        return None
    if isinstance(found, (str, Path)):
        return Path(found)
    candidates = [Path(p) for p in found]
    if len(candidates) == 1 or (candidates and policy == "first"):
        return candidates[0]
    if candidates:
        logger.debug("%d destination candidates, none chosen", len(candidates))
    return None


class ClipboardProcessor:
    """Runs detection, parsing or classification, and materialization for one event.

    Each call reads a single config snapshot up front. Errors are reported
    through the notification sink; ``process`` does not raise them.
    """

    def __init__(
        self,
        store: ConfigStore,
        destination: DestinationProvider,
        notifier: NotificationSink,
        confirmer: ConfirmationSink,
    ) -> None:
        self.store = store
        self.destination = destination
        self.notifier = notifier
        self.confirmer = confirmer

    def process(self, text: str) -> ProcessResult:
        snapshot = self.store.snapshot()
        if not snapshot.config.enabled:
            return ProcessResult(reason="disabled")
        text = normalize_text(text or "")
        if not text:
            return ProcessResult(reason="empty clipboard")

        try:
            result = self._process_tree(text, snapshot)
            if result is None:
                result = self._process_files(text, snapshot)
        except NoDestinationError as e:
            logger.debug("no-op: %s", e)
            return ProcessResult(reason=str(e))
        except (ClipToFileError, OSError) as e:
            logger.error("processing failed: %s", e)
            self.notifier.notify("Error", str(e), Severity.error)
            return ProcessResult(reason=str(e), failed=True)
        return result

    # ------------------------------------------------------------------

    def _destination(self, snapshot: ConfigSnapshot) -> Path:
        dest = resolve_single_destination(self.destination, snapshot.config.destination.policy)
        if dest is None:
            raise NoDestinationError()
        return dest

    def _process_tree(self, text: str, snapshot: ConfigSnapshot) -> ProcessResult | None:
        kind = detect_format(text)
        if kind is FormatKind.none or not snapshot.features.create_tree:
            return None
        tree = parse_tree(text, kind)
        if tree is None:
            logger.debug("%s text is not a tree, falling back to filenames", kind.value)
            return None

        dest = self._destination(snapshot)
        dirs, files = tree.counts()
        if dirs + files > snapshot.config.materialize.large_tree_threshold:
            if not self.confirmer.confirm_large_batch(dirs, files):
                logger.info("large tree declined (%d folders, %d files)", dirs, files)
                return ProcessResult(format=kind, reason="cancelled")

        report = Materializer(dest, snapshot, self.confirmer).materialize_tree(tree)
        self._report("Structure", report)
        return ProcessResult(mode="tree", format=kind, destination=str(dest), report=report)

    def _process_files(self, text: str, snapshot: ConfigSnapshot) -> ProcessResult:
        classification = classify(text, snapshot)
        if classification is None:
            return ProcessResult(reason="no filename found")

        names = expand_batch(classification, snapshot)
        if len(names) > 1:
            mode: Mode = "batch"
            entries = [ClassifiedEntry(filename=name) for name in names]
        else:
            mode = "single"
            entries = [classification.entry]

        dest = self._destination(snapshot)
        report = Materializer(dest, snapshot, self.confirmer).materialize_files(entries)
        self._report("File" if mode == "single" else "Files", report)
        return ProcessResult(mode=mode, destination=str(dest), report=report)

    def _report(self, noun: str, report: MaterializeReport) -> None:
        if report.aborted:
            self.notifier.notify(f"{noun} Failed", _failure_text(report), Severity.error)
        elif report.failures:
            self.notifier.notify(f"{noun} Partially Created", _failure_text(report), Severity.warning)
        elif report.written or report.directories:
            if len(report.created) == 1 and report.written == 1 and not report.directories:
                message = f"Created file: {report.created[0]}"
            else:
                message = report.summary()
            self.notifier.notify(f"{noun} Created", message, Severity.info)
        elif report.skipped:
            self.notifier.notify("Nothing Created", report.summary(), Severity.info)


def _failure_text(report: MaterializeReport) -> str:
    lines = [report.summary()]
    lines.extend(f"{f.path}: {f.reason}" for f in report.failures[:5])
    if len(report.failures) > 5:
        lines.append(f"... and {len(report.failures) - 5} more")
    return "\n".join(lines)
