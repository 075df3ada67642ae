"""
Node.js install pipeline.

This module composes the install stages:
1. Validate the version tag
2. Resolve the artifact platform suffix
3. Build the download URL
4. Skip if the version was already completely unpacked (unless forced)
5. Fetch the archive into memory
6. Resolve and create the install directory
7. Decompress and unpack the archive, then mark the version installed

The archive is fetched before the install directory is created, so a network
failure leaves the filesystem untouched. A failed unpack leaves no completion
marker, so the next run installs again instead of reporting success. Every
stage raises a ``NomError`` subclass; nothing here prints or exits.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests

from .config import NomConfig
from .directory import (
    clear_installed,
    get_install_path,
    is_installed,
    mark_installed,
    resolve_install_path,
)
from .download import DownloadProgress, fetch_archive
from .installer import install_archive
from .platform import resolve_platform_suffix
from .urls import archive_name, build_url
from .version import validate_version

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of a Node.js install."""

    version: str
    """Installed version tag"""

    platform: str
    """Artifact platform suffix that was installed"""

    url: str
    """URL the archive was fetched from"""

    install_path: Path
    """Directory holding the unpacked archive"""

    archive_size_bytes: int
    """Size of the compressed archive (0 when cached)"""

    download_time: float
    """Time spent downloading in seconds"""

    extraction_time: float
    """Time spent decompressing and unpacking in seconds"""

    was_cached: bool
    """Whether the version was already installed (nothing fetched)"""


def install_version(
    version: str,
    config: NomConfig,
    force: bool = False,
    session: Optional[requests.Session] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> InstallResult:
    """
    Download and install a Node.js version.

    Args:
        version: Version tag (e.g. 'v18.19.0')
        config: Resolved configuration
        force: Reinstall even if the version is already unpacked
        session: Optional requests session used for the fetch
        progress_callback: Optional callback for download progress

    Returns:
        InstallResult with installation details

    Raises:
        InvalidVersionError: If the version tag is unsafe
        UnsupportedPlatformError: If no artifact exists for the platform
        NetworkError: If the distribution server cannot be reached
        RemoteArchiveUnavailable: If the server answers with a non-2xx status
        DirectoryCreationFailed: If the install directory cannot be created
        DecompressionFailed: If the archive is not valid gzip
        FileWriteFailed: If the intermediate tar file cannot be written
        UnpackFailed: If the tar container cannot be extracted

    Example:
        >>> config = load_config()
        >>> result = install_version("v18.19.0", config)
        >>> print(f"Installed at: {result.install_path}")
    """
    validate_version(version)
    platform = resolve_platform_suffix(config.platform)
    url = build_url(version, platform, config.dist_url)

    logger.info(f"Installing node.js {version} ({platform})")

    if not force and is_installed(version, config.install_root):
        install_path = get_install_path(version, config.install_root)
        logger.info(f"{version} is already installed at {install_path}")
        return InstallResult(
            version=version,
            platform=platform,
            url=url,
            install_path=install_path,
            archive_size_bytes=0,
            download_time=0.0,
            extraction_time=0.0,
            was_cached=True,
        )

    download_start = time.time()
    archive_bytes = fetch_archive(
        url,
        timeout=config.timeout,
        max_retries=config.max_retries,
        session=session,
        progress_callback=progress_callback,
    )
    download_time = time.time() - download_start
    archive_size = len(archive_bytes)
    logger.info(f"Download complete in {download_time:.2f}s")

    install_path = resolve_install_path(version, config.install_root)
    clear_installed(version, config.install_root)

    extraction_start = time.time()
    tar_name = archive_name(version, platform).removesuffix(".gz")
    install_archive(archive_bytes, install_path, archive_name=tar_name)
    del archive_bytes
    extraction_time = time.time() - extraction_start
    mark_installed(version, config.install_root)

    logger.info(f"Installed node.js {version} at {install_path}")

    return InstallResult(
        version=version,
        platform=platform,
        url=url,
        install_path=install_path,
        archive_size_bytes=archive_size,
        download_time=download_time,
        extraction_time=extraction_time,
        was_cached=False,
    )
