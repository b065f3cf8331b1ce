"""
Sync Engine Module

The three procedures of a synchronization pass: move detection, pruning
and mirroring.

Author: foldersync Project
License: MIT
"""

from .move_detector import MoveDetector
from .pruner import Pruner
from .mirror_builder import MirrorBuilder
from .report import FileMove, SyncReport

__all__ = ['MoveDetector', 'Pruner', 'MirrorBuilder', 'FileMove', 'SyncReport']
