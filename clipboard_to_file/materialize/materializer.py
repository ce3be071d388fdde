"""Materializer: creates parsed trees and classified files under a destination."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from clipboard_to_file.classify.models import ClassifiedEntry
from clipboard_to_file.config.store import ConfigSnapshot
from clipboard_to_file.errors import InvalidNameError, MaterializeError, PathUnsafeError
from clipboard_to_file.interfaces import ConfirmationSink
from clipboard_to_file.materialize.conflict import (
    ConflictResolver,
    atomic_replace,
    unique_path,
    write_new,
)
from clipboard_to_file.materialize.models import ConflictAction, FailureKind, MaterializeReport
from clipboard_to_file.tree.models import TreeNode
from clipboard_to_file.validation import filename_problem, is_path_safe

logger = logging.getLogger(__name__)


class Materializer:
    """Writes entities below one destination root.

    Tree mode never touches existing files. Single-file and batch mode ask
    the confirmation sink once per operation when targets already exist.
    """

    def __init__(self, root: str | Path, snapshot: ConfigSnapshot, confirm: ConfirmationSink) -> None:
        self.root = Path(root)
        self.features = snapshot.features
        self.limits = snapshot.config.materialize
        self._confirm = confirm

    # ------------------------------------------------------------------
    # Tree mode
    # ------------------------------------------------------------------

    def materialize_tree(self, tree: TreeNode) -> MaterializeReport:
        """Create every child of the synthetic *tree* root.

        Invalid or escaping nodes fail on their own; an OS-level failure
        aborts the rest of the tree.
        """
        report = MaterializeReport()
        try:
            self._ensure_root()
            for child in tree.children:
                self._create_node(child, "", report)
        except MaterializeError as e:
            logger.error("tree materialization aborted: %s", e)
            report.aborted = True
            report.fail(e.path, FailureKind.io_failure, str(e))
        return report

    def _inside_root(self, rel: str) -> bool:
        root = self.root.resolve()
        return (root / rel).resolve().is_relative_to(root)

    def _safe_target(self, rel: str) -> Path:
        """Target path for *rel*; raises PathUnsafeError if it leaves the root."""
        if not is_path_safe(rel) or not self._inside_root(rel):
            raise PathUnsafeError(rel)
        return self.root / rel

    def _create_node(self, node: TreeNode, parent_rel: str, report: MaterializeReport) -> None:
        rel = f"{parent_rel}/{node.name}" if parent_rel else node.name
        try:
            target = self._safe_target(rel)
        except PathUnsafeError as e:
            logger.warning("refusing subtree: %s", e)
            report.fail(rel, FailureKind.path_unsafe, str(e))
            return
        problem = filename_problem(node.name)
        if problem is not None:
            logger.warning("skipping %r: %s", rel, problem)
            report.fail(rel, FailureKind.invalid_name, problem)
            return

        if node.is_directory:
            self._create_directory(node, target, rel, report)
        else:
            self._create_tree_file(node, target, rel, report)

    def _create_directory(self, node: TreeNode, target: Path, rel: str, report: MaterializeReport) -> None:
        if target.is_dir():
            logger.debug("folder %s already exists", rel)
        elif os.path.lexists(target):
            if self.features.skip_existing_dirs:
                logger.info("skipping %s: a file is in the way", rel)
                report.skipped.append(rel)
                return
            raise MaterializeError(rel, "create folder", FileExistsError("a file with that name exists"))
        else:
            try:
                target.mkdir()
            except OSError as e:
                raise MaterializeError(rel, "create folder", e) from e
            report.directories.append(rel)
            logger.info("created folder %s", rel)

        for child in node.children:
            self._create_node(child, rel, report)

    def _create_tree_file(self, node: TreeNode, target: Path, rel: str, report: MaterializeReport) -> None:
        self._ensure_parent(target, rel)
        if os.path.lexists(target):
            logger.debug("leaving existing %s untouched", rel)
            report.skipped.append(rel)
            return
        try:
            write_new(target, node.content)
        except FileExistsError:
            report.skipped.append(rel)
            return
        except OSError as e:
            raise MaterializeError(rel, "create file", e) from e
        report.created.append(rel)
        logger.info("created %s (%d chars)", rel, len(node.content or ""))

    def _ensure_parent(self, target: Path, rel: str) -> None:
        parent = target.parent
        if parent.is_dir():
            return
        if not self.features.auto_create_parent_dirs:
            raise MaterializeError(rel, "create file", FileNotFoundError(f"missing folder {parent}"))
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializeError(rel, "create folder", e) from e

    def _ensure_root(self) -> None:
        if self.root.is_dir():
            return
        if not self.features.auto_create_parent_dirs:
            raise MaterializeError(str(self.root), "open destination", NotADirectoryError("not a folder"))
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializeError(str(self.root), "create folder", e) from e

    # ------------------------------------------------------------------
    # Single-file / batch mode
    # ------------------------------------------------------------------

    def materialize_files(self, entries: list[ClassifiedEntry]) -> MaterializeReport:
        """Create flat files directly below the root.

        One entry is single-file mode, where an invalid name raises
        InvalidNameError. In batch mode invalid names fail individually.
        The conflict decision covers every entry that already exists;
        new entries are always created.
        """
        report = MaterializeReport()
        single = len(entries) == 1
        valid: list[ClassifiedEntry] = []
        for entry in entries:
            problem = filename_problem(entry.filename)
            if problem is None:
                valid.append(entry)
            elif single:
                raise InvalidNameError(entry.filename, problem)
            else:
                logger.warning("skipping %r: %s", entry.filename, problem)
                report.fail(entry.filename, FailureKind.invalid_name, problem)
        if not valid:
            return report

        self._ensure_root()
        conflicts = {e.filename for e in valid if os.path.lexists(self.root / e.filename)}
        action: ConflictAction | None = None
        if conflicts:
            resolver = ConflictResolver(self._confirm)
            action = resolver.decide([e.filename for e in valid if e.filename in conflicts])
            report.action = action

        for entry in valid:
            target = self.root / entry.filename
            try:
                if entry.filename in conflicts:
                    self._resolve(entry, target, action, report)
                else:
                    write_new(target, entry.content)
                    report.created.append(entry.filename)
                    logger.info("created %s (%d chars)", entry.filename, len(entry.content))
            except MaterializeError as e:
                logger.error("%s", e)
                report.fail(entry.filename, FailureKind.io_failure, str(e))
            except OSError as e:
                logger.error("could not create %s: %s", entry.filename, e)
                report.fail(entry.filename, FailureKind.io_failure, str(e))
        return report

    def _resolve(
        self,
        entry: ClassifiedEntry,
        target: Path,
        action: ConflictAction | None,
        report: MaterializeReport,
    ) -> None:
        if action is ConflictAction.replace:
            atomic_replace(target, entry.content, self.limits.max_temp_attempts)
            report.replaced.append(entry.filename)
            logger.info("replaced %s", entry.filename)
        elif action is ConflictAction.rename:
            new_target = unique_path(target, self.limits.max_rename_attempts)
            write_new(new_target, entry.content)
            report.renamed[entry.filename] = new_target.name
            logger.info("created %s instead of %s", new_target.name, entry.filename)
        else:
            report.skipped.append(entry.filename)
            logger.info("kept existing %s", entry.filename)
