"""
foldersync

One-way periodic mirroring of a source directory tree into a replica,
with checksum-based change and move detection.

Author: foldersync Project
License: MIT
"""

__version__ = "0.1.0"
