"""
Sync Engine

Runs one synchronization pass: move detection, pruning and mirroring, in
that order, against a fresh scan of both trees.

Author: foldersync Project
License: MIT
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from ..utils.logger import get_logger
from ..utils.file_ops import paths_overlap
from ..sync_engine import MirrorBuilder, MoveDetector, Pruner, SyncReport

logger = get_logger(__name__)


class SyncError(Exception):
    """A synchronization pass failed."""

    def __init__(self, message: str, report: Optional[SyncReport] = None):
        """
        Initialize sync error.

        Args:
            message: Human-readable failure description
            report: Changes applied before the failure, if any
        """
        super().__init__(message)
        self.report = report


class SyncEngine:
    """
    Core synchronization engine.

    Holds no state about the trees between passes; only cumulative
    counters are kept.
    """

    def __init__(self, hash_algorithm: str = "sha256"):
        """
        Initialize sync engine.

        Args:
            hash_algorithm: Algorithm used to checksum file content
        """
        self.hash_algorithm = hash_algorithm
        self.move_detector = MoveDetector(hash_algorithm)
        self.pruner = Pruner()
        self.mirror_builder = MirrorBuilder(hash_algorithm)

        self.stats = self._empty_stats()

        logger.debug(f"SyncEngine initialized ({hash_algorithm})")

    def run_once(
        self,
        source_root: Union[str, Path],
        replica_root: Union[str, Path]
    ) -> SyncReport:
        """
        Run a single synchronization pass.

        Args:
            source_root: Directory to mirror from
            replica_root: Directory to mirror into

        Returns:
            SyncReport describing the replica mutations

        Raises:
            SyncError: If the roots are unusable or a filesystem
                operation fails mid-pass
        """
        source_root = Path(os.path.abspath(source_root))
        replica_root = Path(os.path.abspath(replica_root))

        # A missing source must never be read as "everything was deleted"
        if not source_root.is_dir():
            self.stats["passes_failed"] += 1
            raise SyncError(f"Source directory not found: {source_root}")

        if paths_overlap(source_root, replica_root):
            self.stats["passes_failed"] += 1
            raise SyncError(
                f"Source and replica directories overlap: {source_root}, {replica_root}"
            )

        report = SyncReport(source_root=source_root, replica_root=replica_root)
        logger.debug(f"Starting sync pass: {source_root} -> {replica_root}")

        try:
            self.move_detector.detect_moves(source_root, replica_root, report)
            self.pruner.prune(source_root, replica_root, report)
            self.mirror_builder.build(source_root, replica_root, report)
        except OSError as e:
            report.finished_at = datetime.now()
            self._record(report, failed=True)
            raise SyncError(str(e), report=report) from e

        report.finished_at = datetime.now()
        self._record(report)

        logger.debug(
            f"Sync pass finished in {report.duration_seconds:.2f}s: {report.summary()}"
        )
        return report

    def _record(self, report: SyncReport, failed: bool = False):
        """Fold a pass report into the cumulative counters."""
        if failed:
            self.stats["passes_failed"] += 1
        else:
            self.stats["passes_completed"] += 1

        self.stats["directories_created"] += len(report.directories_created)
        self.stats["files_created"] += len(report.files_created)
        self.stats["files_changed"] += len(report.files_changed)
        self.stats["files_moved"] += len(report.files_moved)
        self.stats["files_deleted"] += len(report.files_deleted)
        self.stats["directories_deleted"] += len(report.directories_deleted)

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            "passes_completed": 0,
            "passes_failed": 0,
            "directories_created": 0,
            "files_created": 0,
            "files_changed": 0,
            "files_moved": 0,
            "files_deleted": 0,
            "directories_deleted": 0
        }

    def get_stats(self) -> Dict[str, int]:
        """Get sync statistics."""
        return self.stats.copy()

    def reset_stats(self):
        """Reset statistics counters."""
        self.stats = self._empty_stats()
        logger.info("Statistics reset")


def run_once(
    source_root: Union[str, Path],
    replica_root: Union[str, Path],
    hash_algorithm: str = "sha256"
) -> SyncReport:
    """
    Convenience function to run a single pass with a fresh engine.

    Args:
        source_root: Directory to mirror from
        replica_root: Directory to mirror into
        hash_algorithm: Algorithm used to checksum file content

    Returns:
        SyncReport for the pass
    """
    return SyncEngine(hash_algorithm=hash_algorithm).run_once(source_root, replica_root)
