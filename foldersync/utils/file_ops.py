"""
File Operation Utilities

Filesystem primitives used by the sync procedures: hashing, tree listing,
relative path translation between roots, and the copy/move/delete
operations applied to the replica.

Author: foldersync Project
License: MIT
"""

import os
import shutil
import stat
import hashlib
from pathlib import Path
from typing import Dict, List, Union

from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

HASH_CHUNK_SIZE = 65536  # 64KB chunks for hashing


def calculate_file_hash(
    file_path: PathLike,
    algorithm: str = "sha256",
    chunk_size: int = HASH_CHUNK_SIZE
) -> str:
    """
    Calculate hash of a file.

    The file handle is held only while this file is read.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm (md5, sha1, sha256, etc.)
        chunk_size: Size of chunks to read (bytes)

    Returns:
        Hexadecimal hash string

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If algorithm is unsupported
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        hash_func = hashlib.new(algorithm)
    except ValueError:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            hash_func.update(chunk)

    return hash_func.hexdigest()


def _walk(root: Path):
    # Sorted, top-down, symlinked directories are not descended into
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        filenames.sort()
        yield Path(dirpath), dirnames, filenames


def is_regular_file(path: PathLike) -> bool:
    """True for a regular file that is not a symlink."""
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except FileNotFoundError:
        return False


def list_files(root: PathLike, follow_symlinks: bool = True) -> List[Path]:
    """
    List every regular file under root, recursively.

    Args:
        root: Tree root
        follow_symlinks: Include symlinks that point at regular files.
            When False only real regular files are listed.

    Returns an empty list when root does not exist.
    """
    files = []
    for dirpath, _, filenames in _walk(Path(root)):
        for name in filenames:
            path = dirpath / name
            if follow_symlinks:
                if path.is_file():
                    files.append(path)
            elif is_regular_file(path):
                files.append(path)
    return files


def list_foreign_entries(root: PathLike) -> List[Path]:
    """
    List entries under root that are neither regular files nor directories.

    Covers symlinks of any kind (to files, to directories, dangling) and
    special files such as FIFOs and sockets. Symlinked directories are
    reported, not descended into.
    """
    entries = []
    for dirpath, dirnames, filenames in _walk(Path(root)):
        for name in dirnames:
            path = dirpath / name
            if path.is_symlink():
                entries.append(path)
        for name in filenames:
            path = dirpath / name
            if not is_regular_file(path):
                entries.append(path)
    return entries


def list_directories(root: PathLike) -> List[Path]:
    """
    List every directory under root (root excluded), recursively.

    Directories are returned in top-down discovery order: a parent always
    comes before its children, so iterating the list in reverse visits
    children first.
    """
    directories = []
    for dirpath, dirnames, _ in _walk(Path(root)):
        for name in dirnames:
            path = dirpath / name
            if not path.is_symlink():
                directories.append(path)
    return directories


def snapshot_tree(
    root: PathLike,
    algorithm: str = "sha256",
    follow_symlinks: bool = True
) -> Dict[Path, str]:
    """
    Build a checksum snapshot of a tree.

    Args:
        root: Tree root
        algorithm: Hash algorithm
        follow_symlinks: Hash the targets of file symlinks too

    Returns:
        Dictionary mapping absolute file path -> checksum
    """
    snapshot = {}
    for file_path in list_files(root, follow_symlinks=follow_symlinks):
        snapshot[file_path] = calculate_file_hash(file_path, algorithm)

    logger.debug(f"Hashed {len(snapshot)} files under {root}")
    return snapshot


def relative_to_root(path: PathLike, root: PathLike) -> Path:
    """
    Express path relative to root.

    Raises:
        ValueError: If path is not located under root
    """
    return Path(path).relative_to(Path(root))


def translate_path(path: PathLike, from_root: PathLike, to_root: PathLike) -> Path:
    """
    Map a path under from_root to the same relative location under to_root.

    Works on path components, so a root that is a string prefix of an
    unrelated directory (``/data/src`` vs ``/data/src2``) is never matched.

    Raises:
        ValueError: If path is not located under from_root
    """
    return Path(to_root) / relative_to_root(path, from_root)


def paths_overlap(first: PathLike, second: PathLike) -> bool:
    """True if the two paths are equal or one is nested inside the other."""
    first = Path(os.path.abspath(first))
    second = Path(os.path.abspath(second))
    return first == second or first in second.parents or second in first.parents


def ensure_directory(directory: PathLike) -> bool:
    """
    Ensure a directory exists, creating it (and its parents) if necessary.

    Args:
        directory: Directory path

    Returns:
        True if the directory was created, False if it already existed
    """
    path = Path(directory)
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


def copy_file(source: PathLike, destination: PathLike) -> None:
    """
    Copy a file, overwriting the destination if it exists.

    A symlink at the destination is replaced, never written through.
    """
    if os.path.islink(destination):
        os.remove(destination)
    shutil.copy2(str(source), str(destination))
    logger.debug(f"Copied: {source} -> {destination}")


def move_file(source: PathLike, destination: PathLike) -> None:
    """
    Move a file, creating the destination's parent directories.

    Raises:
        FileExistsError: If the destination is already occupied
    """
    destination = Path(destination)
    if destination.exists() or destination.is_symlink():
        raise FileExistsError(f"Destination already exists: {destination}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(destination))
    logger.debug(f"Moved: {source} -> {destination}")


def delete_file(file_path: PathLike) -> None:
    """Delete a single file."""
    os.remove(file_path)


def remove_empty_directory(directory: PathLike) -> None:
    """
    Remove a directory that must already be empty.

    Never recurses: leftover content raises OSError.
    """
    os.rmdir(directory)
