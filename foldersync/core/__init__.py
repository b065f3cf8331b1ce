"""
foldersync Core Module

Synchronization engine and the periodic driver around it.

Author: foldersync Project
License: MIT
"""

from .orchestrator import Orchestrator
from .sync_engine import SyncEngine, SyncError, run_once

__all__ = ['Orchestrator', 'SyncEngine', 'SyncError', 'run_once']
