"""
Pruner

Removes replica files and directories that have no source counterpart.

Author: foldersync Project
License: MIT
"""

from pathlib import Path
from typing import Optional, Union

from ..utils.logger import get_logger
from ..utils.file_ops import (
    delete_file,
    list_directories,
    list_files,
    list_foreign_entries,
    remove_empty_directory,
    translate_path
)
from .report import SyncReport

logger = get_logger(__name__)


class Pruner:
    """
    Deletes replica-only entries.

    Symlinks and special files go first, since the replica may only hold
    regular files and directories. A symlink is unlinked, its target is never
    touched. Then replica-only files, then directories deepest-first.
    Directories are removed non-recursively: a directory that still holds
    content raises OSError and fails the pass instead of being force-deleted.
    """

    def prune(
        self,
        source_root: Union[str, Path],
        replica_root: Union[str, Path],
        report: Optional[SyncReport] = None
    ) -> SyncReport:
        """
        Remove replica entries missing from the source.

        Args:
            source_root: Source tree root
            replica_root: Replica tree root
            report: Pass report to record deletions in

        Returns:
            The report, created if none was given

        Raises:
            OSError: If a file or directory cannot be removed
        """
        source_root = Path(source_root)
        replica_root = Path(replica_root)
        if report is None:
            report = SyncReport(source_root=source_root, replica_root=replica_root)

        for entry in list_foreign_entries(replica_root):
            delete_file(entry)
            report.files_deleted.append(entry)
            logger.info(f"File deleted: {entry} (not a regular file)")

        for replica_file in list_files(replica_root, follow_symlinks=False):
            source_file = translate_path(replica_file, replica_root, source_root)
            if not source_file.is_file():
                delete_file(replica_file)
                report.files_deleted.append(replica_file)
                logger.info(f"File deleted: {replica_file}")

        # Reverse discovery order visits children before their parents
        for replica_dir in reversed(list_directories(replica_root)):
            source_dir = translate_path(replica_dir, replica_root, source_root)
            if not source_dir.is_dir():
                remove_empty_directory(replica_dir)
                report.directories_deleted.append(replica_dir)
                logger.info(f"Directory deleted: {replica_dir}")

        return report
