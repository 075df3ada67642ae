"""
Install directory management for nom.

Directory Structure:
    Install Root (~/.nom/ or %USERPROFILE%\\.nom\\):
        - config.yaml : Optional user configuration
        - <version>/  : One directory per installed Node.js version
        - .installed/ : One marker file per version whose unpack completed

The home directory is looked up once, at the configuration boundary, by
``get_install_root``. ``resolve_install_path`` only ever works with the
injected root so it can be exercised without touching the environment.
"""

import logging
import os
from pathlib import Path, PurePath
from typing import Optional, Union

from .exceptions import DirectoryCreationFailed, FileWriteFailed, NoHomeDirectory

logger = logging.getLogger(__name__)

INSTALL_NAMESPACE = ".nom"
MARKER_DIR = ".installed"


def get_home_dir() -> Path:
    """
    Get the current user's home directory.

    Returns:
        Path: Home directory path.

    Raises:
        NoHomeDirectory: If the home directory cannot be determined.
    """
    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise NoHomeDirectory(
                "USERPROFILE environment variable is not set. "
                "Cannot determine install directory."
            )
        return Path(user_profile)

    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise NoHomeDirectory(f"No home directory found: {e}") from e


def get_install_root(home: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the install root directory path.

    Args:
        home: Home directory to use. If None, the user's home is looked up.

    Returns:
        Path: ``<home>/.nom``

    Raises:
        NoHomeDirectory: If ``home`` is None and no home directory is found.

    Example:
        >>> get_install_root(Path('/home/user'))
        PosixPath('/home/user/.nom')
    """
    if home is None:
        home = get_home_dir()
    if not isinstance(home, (Path, PurePath)):
        home = Path(home)
    return home / INSTALL_NAMESPACE


def get_install_path(version: str, install_root: Union[str, Path]) -> Path:
    """Return ``<install_root>/<version>`` without touching the filesystem."""
    return Path(install_root) / version


def resolve_install_path(version: str, install_root: Union[str, Path]) -> Path:
    """
    Resolve the install directory for a version, creating it if needed.

    Args:
        version: Validated version tag.
        install_root: Install root directory.

    Returns:
        Path: Existing directory ``<install_root>/<version>``.

    Raises:
        DirectoryCreationFailed: If the directory cannot be created, or the
            path exists but is not a directory.

    Example:
        >>> resolve_install_path("v18.19.0", Path("/home/user/.nom"))
        PosixPath('/home/user/.nom/v18.19.0')
    """
    install_path = get_install_path(version, install_root)

    if install_path.is_dir():
        if not os.access(install_path, os.W_OK):
            raise DirectoryCreationFailed(
                install_path, PermissionError(f"{install_path} is not writable")
            )
        return install_path

    if install_path.exists():
        raise DirectoryCreationFailed(
            install_path, NotADirectoryError(f"{install_path} is not a directory")
        )

    logger.debug(f"Creating install directory {install_path}")
    try:
        install_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationFailed(install_path, e) from e

    return install_path


def get_marker_path(version: str, install_root: Union[str, Path]) -> Path:
    """Return the completion marker path for ``version``."""
    return Path(install_root) / MARKER_DIR / version


def mark_installed(version: str, install_root: Union[str, Path]) -> Path:
    """
    Record that ``version`` was unpacked completely.

    Raises:
        FileWriteFailed: If the marker cannot be written.
    """
    marker = get_marker_path(version, install_root)
    try:
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.touch()
    except OSError as e:
        raise FileWriteFailed(f"Failed to write install marker {marker}: {e}") from e
    return marker


def clear_installed(version: str, install_root: Union[str, Path]) -> None:
    """
    Drop the completion marker for ``version`` before it is (re)unpacked.

    Raises:
        FileWriteFailed: If an existing marker cannot be removed.
    """
    marker = get_marker_path(version, install_root)
    try:
        marker.unlink(missing_ok=True)
    except OSError as e:
        raise FileWriteFailed(f"Failed to remove install marker {marker}: {e}") from e


def is_installed(version: str, install_root: Union[str, Path]) -> bool:
    """
    Check whether a version was completely unpacked.

    An interrupted or failed unpack leaves files behind but no marker, so
    such a version is not reported as installed.

    Args:
        version: Version tag.
        install_root: Install root directory.

    Returns:
        True if the completion marker exists and ``<install_root>/<version>``
        is a non-empty directory.
    """
    if not get_marker_path(version, install_root).is_file():
        return False
    install_path = get_install_path(version, install_root)
    if not install_path.is_dir():
        return False
    return any(install_path.iterdir())
