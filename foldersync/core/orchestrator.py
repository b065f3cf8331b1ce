"""
Orchestrator

Outer driver that re-runs the sync engine on a fixed interval, logs pass
failures and keeps going.

Author: foldersync Project
License: MIT
"""

from threading import Event
from typing import Any, Dict, Optional

from ..utils.logger import get_logger
from ..config.schema import Config
from .sync_engine import SyncEngine, SyncError
from ..sync_engine import SyncReport

logger = get_logger(__name__)


class Orchestrator:
    """
    Periodic synchronization driver.

    Passes run strictly one after another on the calling thread. The wait
    between passes is an Event wait so stop() can end the loop early.
    """

    def __init__(self, config: Config, sync_engine: Optional[SyncEngine] = None):
        """
        Initialize orchestrator.

        Args:
            config: Application configuration
            sync_engine: Engine to drive (built from config if None)
        """
        self.config = config
        self.sync_engine = sync_engine or SyncEngine(
            hash_algorithm=config.sync.hash_algorithm
        )

        self.last_report: Optional[SyncReport] = None
        self.last_error: Optional[str] = None

        # Control flags
        self._running = False
        self._stop_event = Event()

        logger.debug("Orchestrator initialized")

    def run_pass(self) -> Optional[SyncReport]:
        """
        Run one pass, swallowing and logging any failure.

        Returns:
            SyncReport on success, None if the pass failed
        """
        source = self.config.sync.source_path
        replica = self.config.sync.replica_path

        try:
            report = self.sync_engine.run_once(source, replica)
        except SyncError as e:
            self.last_error = str(e)
            logger.error(f"An error occurred during synchronization: {e}")
            return None
        except Exception as e:
            self.last_error = str(e)
            logger.exception(f"Unexpected error during synchronization: {e}")
            return None

        self.last_report = report
        self.last_error = None

        if report.has_changes:
            logger.info(f"Sync pass completed: {report.summary()}")
        else:
            logger.debug("Sync pass completed: replica up to date")

        return report

    def run_forever(self):
        """Run passes every configured interval until stop() is called."""
        if self._running:
            logger.warning("Orchestrator already running")
            return

        interval = self.config.scheduling.interval_seconds
        logger.info(
            f"Starting synchronization every {interval}s: "
            f"{self.config.sync.source_path} -> {self.config.sync.replica_path}"
        )

        self._running = True
        self._stop_event.clear()

        try:
            while not self._stop_event.is_set():
                self.run_pass()
                self._stop_event.wait(interval)
        finally:
            self._running = False
            stats = self.sync_engine.get_stats()
            logger.info(
                f"Synchronization stopped after {stats['passes_completed']} passes "
                f"({stats['passes_failed']} failed)"
            )

    def stop(self):
        """Ask the loop to exit after the current pass."""
        self._stop_event.set()

    @property
    def is_running(self) -> bool:
        return self._running

    def get_status(self) -> Dict[str, Any]:
        """Get orchestrator status and cumulative statistics."""
        return {
            "running": self._running,
            "source_path": self.config.sync.source_path,
            "replica_path": self.config.sync.replica_path,
            "interval_seconds": self.config.scheduling.interval_seconds,
            "last_error": self.last_error,
            "last_pass_at": (
                self.last_report.finished_at.isoformat()
                if self.last_report and self.last_report.finished_at else None
            ),
            "stats": self.sync_engine.get_stats()
        }
