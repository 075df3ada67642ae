"""
File system utilities for nom.

This module provides the small set of file operations the installer relies on:
- Path containment checks for archive members
- Safe directory removal
- Scoped temporary directories with guaranteed cleanup
"""

import logging
import shutil
import tarfile
import tempfile
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional, Union

from .exceptions import NomError

logger = logging.getLogger(__name__)


class FilesystemError(NomError):
    """Base exception for filesystem operations."""

    pass


class InsecureArchiveError(FilesystemError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether ``path`` is ``parent`` or lies beneath it.

    Example:
        >>> is_relative_to(Path('/a/b/c'), Path('/a'))
        True
        >>> is_relative_to(Path('/a/b'), Path('/c'))
        False
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def validate_archive_member(name: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Args:
        name: Member path from archive
        destination: Extraction destination

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / name).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{name}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def validate_archive_link(member: tarfile.TarInfo, destination: Path) -> None:
    """
    Validate that a symlink or hard link member points inside ``destination``.

    Symlink targets are resolved from the member's own directory, hard link
    targets from the archive root.

    Raises:
        InsecureArchiveError: If the link target lies outside ``destination``
    """
    if member.issym():
        target = destination / PurePosixPath(member.name).parent / member.linkname
    else:
        target = destination / member.linkname

    if not is_relative_to(target.resolve(), destination.resolve()):
        raise InsecureArchiveError(
            f"Archive link '{member.name}' -> '{member.linkname}' points outside "
            "the destination. Extraction has been blocked."
        )


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


# ============================================================================
# Temporary Directory Management
# ============================================================================


@contextmanager
def temporary_directory(
    prefix: str = "nom_", parent: Optional[Union[str, Path]] = None
) -> Iterator[Path]:
    """
    Context manager for temporary directory with automatic cleanup.

    The directory is removed on every exit path, success or failure.

    Args:
        prefix: Prefix for temp directory name
        parent: Directory to create it in (system temp dir if None)

    Yields:
        Path to temporary directory

    Example:
        >>> with temporary_directory() as tmp:
        ...     (tmp / 'file.txt').write_text('test')
    """
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))

    try:
        yield temp_dir
    finally:
        try:
            safe_rmtree(temp_dir, require_prefix=temp_dir.parent)
        except FilesystemError as e:
            logger.warning(f"Failed to remove temporary directory: {e}")


__all__ = [
    "FilesystemError",
    "InsecureArchiveError",
    "is_relative_to",
    "validate_archive_member",
    "validate_archive_link",
    "safe_rmtree",
    "temporary_directory",
]
