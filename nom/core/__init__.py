"""
Core functionality for nom.

This package contains the install pipeline and the modules it is built from.
"""

from .config import NomConfig, load_config
from .directory import get_install_root, resolve_install_path
from .download import fetch_archive
from .installer import install_archive
from .pipeline import InstallResult, install_version
from .platform import PlatformInfo, detect_platform, resolve_platform_suffix
from .urls import NODE_DIST_URL, build_url
from .version import validate_version

from .exceptions import (
    NomError,
    InvalidVersionError,
    ConfigError,
    UnsupportedPlatformError,
    NoHomeDirectory,
    DirectoryCreationFailed,
    NetworkError,
    RemoteArchiveUnavailable,
    ArchiveError,
    DecompressionFailed,
    FileWriteFailed,
    UnpackFailed,
)

__all__ = [
    "NomConfig",
    "load_config",
    "get_install_root",
    "resolve_install_path",
    "fetch_archive",
    "install_archive",
    "InstallResult",
    "install_version",
    "PlatformInfo",
    "detect_platform",
    "resolve_platform_suffix",
    "NODE_DIST_URL",
    "build_url",
    "validate_version",
    "NomError",
    "InvalidVersionError",
    "ConfigError",
    "UnsupportedPlatformError",
    "NoHomeDirectory",
    "DirectoryCreationFailed",
    "NetworkError",
    "RemoteArchiveUnavailable",
    "ArchiveError",
    "DecompressionFailed",
    "FileWriteFailed",
    "UnpackFailed",
]
