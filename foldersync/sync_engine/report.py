"""
Sync Report

Result of a single synchronization pass.

Author: foldersync Project
License: MIT
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional


@dataclass
class FileMove:
    """A replica file relocated to match a moved source file."""
    source: Path
    destination: Path
    checksum: str


@dataclass
class SyncReport:
    """Replica mutations performed during one pass."""
    source_root: Path
    replica_root: Path
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    directories_created: List[Path] = field(default_factory=list)
    files_created: List[Path] = field(default_factory=list)
    files_changed: List[Path] = field(default_factory=list)
    files_moved: List[FileMove] = field(default_factory=list)
    files_deleted: List[Path] = field(default_factory=list)
    directories_deleted: List[Path] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return (
            len(self.directories_created)
            + len(self.files_created)
            + len(self.files_changed)
            + len(self.files_moved)
            + len(self.files_deleted)
            + len(self.directories_deleted)
        )

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def summary(self) -> str:
        """One-line description of the pass."""
        return (
            f"{len(self.files_created)} created, "
            f"{len(self.files_changed)} changed, "
            f"{len(self.files_moved)} moved, "
            f"{len(self.files_deleted)} files deleted, "
            f"{len(self.directories_created)} directories created, "
            f"{len(self.directories_deleted)} directories deleted"
        )
