"""
Mirror Builder

Creates missing replica directories and files, and overwrites replica
files whose content differs from the source.

Author: foldersync Project
License: MIT
"""

from pathlib import Path
from typing import Optional, Union

from ..utils.logger import get_logger
from ..utils.file_ops import (
    calculate_file_hash,
    copy_file,
    delete_file,
    ensure_directory,
    list_directories,
    list_files,
    translate_path
)
from .report import SyncReport

logger = get_logger(__name__)


class MirrorBuilder:
    """
    Brings the replica up to date with the source.

    Directories are created before any file is copied, since a copy needs
    its parent directory to exist.
    """

    def __init__(self, hash_algorithm: str = "sha256"):
        """
        Initialize mirror builder.

        Args:
            hash_algorithm: Algorithm used to compare file content
        """
        self.hash_algorithm = hash_algorithm

    def build(
        self,
        source_root: Union[str, Path],
        replica_root: Union[str, Path],
        report: Optional[SyncReport] = None
    ) -> SyncReport:
        """
        Create and update replica entries from the source.

        Args:
            source_root: Source tree root
            replica_root: Replica tree root
            report: Pass report to record changes in

        Returns:
            The report, created if none was given

        Raises:
            OSError: If a directory cannot be created or a file copied
        """
        source_root = Path(source_root)
        replica_root = Path(replica_root)
        if report is None:
            report = SyncReport(source_root=source_root, replica_root=replica_root)

        if ensure_directory(replica_root):
            report.directories_created.append(replica_root)
            logger.info(f"Directory created: {replica_root}")

        for source_dir in list_directories(source_root):
            replica_dir = translate_path(source_dir, source_root, replica_root)
            if replica_dir.is_symlink():
                self._remove_foreign(replica_dir, report)
            if ensure_directory(replica_dir):
                report.directories_created.append(replica_dir)
                logger.info(f"Directory created: {replica_dir}")

        for source_file in list_files(source_root):
            replica_file = translate_path(source_file, source_root, replica_root)
            if replica_file.is_symlink():
                self._remove_foreign(replica_file, report)

            if not replica_file.exists():
                copy_file(source_file, replica_file)
                report.files_created.append(replica_file)
                logger.info(f"File created: {replica_file}")
            elif self.content_differs(source_file, replica_file):
                copy_file(source_file, replica_file)
                report.files_changed.append(replica_file)
                logger.info(f"File changed: {replica_file}")

        return report

    def _remove_foreign(self, path: Path, report: SyncReport) -> None:
        # Unlink only; the link target stays as it is
        delete_file(path)
        report.files_deleted.append(path)
        logger.info(f"File deleted: {path} (not a regular file)")

    def content_differs(self, source_file: Path, replica_file: Path) -> bool:
        """
        Compare two files by content.

        A size mismatch settles it without reading either file; otherwise
        both checksums are computed.
        """
        if source_file.stat().st_size != replica_file.stat().st_size:
            return True

        source_hash = calculate_file_hash(source_file, self.hash_algorithm)
        replica_hash = calculate_file_hash(replica_file, self.hash_algorithm)
        return source_hash != replica_hash
