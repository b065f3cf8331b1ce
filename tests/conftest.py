"""
Shared test fixtures.

Author: foldersync Project
License: MIT
"""

import logging

import pytest

from foldersync.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_foldersync_logger():
    """Undo setup_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def trees(tmp_path):
    """Empty source directory and a not-yet-created replica path."""
    source = tmp_path / "source"
    replica = tmp_path / "replica"
    source.mkdir()
    return source, replica


def write(root, relative, content):
    """Create a file (and its parents) under root."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content)
    return path


def tree_contents(root):
    """Map relative file path -> bytes for every file under root."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def tree_directories(root):
    """Set of relative directory paths under root."""
    return {
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_dir()
    }
