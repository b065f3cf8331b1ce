"""
Move Detector

Finds replica files whose content matches a source file at a different
relative path and relocates them, turning a delete-then-copy into a rename.

Author: foldersync Project
License: MIT
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..utils.logger import get_logger
from ..utils.file_ops import move_file, relative_to_root, snapshot_tree
from .report import FileMove, SyncReport

logger = get_logger(__name__)


class MoveDetector:
    """
    Checksum-indexed move/rename detection.

    Both trees are hashed on every call. When several replica files share a
    checksum, the index keeps the last one encountered in sorted traversal
    order; which duplicate gets moved is otherwise arbitrary.
    """

    def __init__(self, hash_algorithm: str = "sha256"):
        """
        Initialize move detector.

        Args:
            hash_algorithm: Algorithm used to checksum file content
        """
        self.hash_algorithm = hash_algorithm

    def build_hash_index(self, snapshot: Dict[Path, str]) -> Dict[str, Path]:
        """
        Invert a snapshot into a checksum -> path index.

        Args:
            snapshot: Mapping path -> checksum

        Returns:
            Dictionary mapping checksum -> path (last path wins on duplicates)
        """
        hash_index = {}
        for file_path, checksum in snapshot.items():
            hash_index[checksum] = file_path
        return hash_index

    def detect_moves(
        self,
        source_root: Union[str, Path],
        replica_root: Union[str, Path],
        report: Optional[SyncReport] = None
    ) -> List[FileMove]:
        """
        Relocate replica files to follow moved/renamed source files.

        Args:
            source_root: Source tree root
            replica_root: Replica tree root
            report: Pass report to record moves in

        Returns:
            List of moves performed

        Raises:
            OSError: If a move fails
        """
        source_root = Path(source_root)
        replica_root = Path(replica_root)

        source_files = self._snapshot_relative(source_root)
        # Replica symlinks are never moved; the pruner unlinks them
        replica_files = self._snapshot_relative(replica_root, follow_symlinks=False)
        replica_index = self.build_hash_index(replica_files)

        moves = []
        for relative, checksum in source_files.items():
            if replica_files.get(relative) == checksum:
                continue

            match = replica_index.get(checksum)
            if match is None or match == relative:
                continue

            # The match already mirrors another source file with this content
            if source_files.get(match) == checksum:
                continue

            destination = replica_root / relative
            if self._is_blocked(destination, replica_root):
                logger.debug(f"Move target occupied, leaving for mirror: {destination}")
                continue

            old_path = replica_root / match
            move_file(old_path, destination)
            logger.info(f"File moved: {old_path} -> {destination}")

            del replica_index[checksum]
            del replica_files[match]
            replica_files[relative] = checksum

            move = FileMove(source=old_path, destination=destination, checksum=checksum)
            moves.append(move)
            if report is not None:
                report.files_moved.append(move)

        return moves

    def _snapshot_relative(
        self,
        root: Path,
        follow_symlinks: bool = True
    ) -> Dict[Path, str]:
        snapshot = snapshot_tree(root, self.hash_algorithm, follow_symlinks)
        return {
            relative_to_root(file_path, root): checksum
            for file_path, checksum in snapshot.items()
        }

    @staticmethod
    def _is_blocked(destination: Path, replica_root: Path) -> bool:
        """True if destination exists or a symlink or non-directory sits on its parent chain."""
        if destination.exists() or destination.is_symlink():
            return True

        for parent in destination.parents:
            if parent == replica_root:
                break
            if parent.is_symlink() or (parent.exists() and not parent.is_dir()):
                return True

        return False
