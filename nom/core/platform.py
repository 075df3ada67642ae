"""
Platform detection for nom.

This module detects the current OS and CPU architecture and maps them to the
platform suffix used in Node.js distribution artifact names
(e.g. ``node-v18.19.0-linux-x64.tar.gz``).

Usage:
    from nom.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"Artifact suffix: {platform_info.node_suffix()}")
"""

import functools
import platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .exceptions import UnsupportedPlatformError

# (os, arch) -> Node.js artifact platform suffix. Only platforms that ship a
# .tar.gz build on the distribution server are listed.
NODE_PLATFORM_SUFFIXES: Dict[Tuple[str, str], str] = {
    ("macos", "x64"): "darwin-x64",
    ("macos", "arm64"): "darwin-arm64",
    ("linux", "x64"): "linux-x64",
    ("linux", "arm64"): "linux-arm64",
    ("linux", "arm"): "linux-armv7l",
    ("linux", "ppc64le"): "linux-ppc64le",
    ("linux", "s390x"): "linux-s390x",
    ("aix", "ppc64"): "aix-ppc64",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform information relevant to artifact selection.

    Attributes:
        os: Operating system ('linux', 'macos', 'windows', 'aix')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm', ...)
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('macos', 'arm64').platform_string()
            'macos-arm64'
        """
        return f"{self.os}-{self.arch}"

    def node_suffix(self) -> str:
        """
        Get the Node.js artifact suffix for this platform.

        Returns:
            Suffix such as 'darwin-x64' or 'linux-armv7l'

        Raises:
            UnsupportedPlatformError: If no artifact exists for this platform

        Example:
            >>> PlatformInfo('macos', 'x64').node_suffix()
            'darwin-x64'
        """
        suffix = NODE_PLATFORM_SUFFIXES.get((self.os, self.arch))
        if suffix is None:
            raise UnsupportedPlatformError(
                f"No Node.js tarball is published for {self.platform_string()}. "
                f"Supported: {', '.join(get_supported_platforms())}"
            )
        return suffix

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', 'aix', or the raw
        lowercase system name for anything else
    """
    system = platform.system().lower()

    if system == "darwin":
        return "macos"
    return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm', or the raw
        lowercase machine name for anything else
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    elif machine in ("ppc64le", "s390x"):
        return machine
    elif machine.startswith("00") or machine == "powerpc":
        # AIX reports the machine serial number
        return "ppc64"
    else:
        return machine


def resolve_platform_suffix(override: Optional[str] = None) -> str:
    """
    Resolve the artifact suffix to download.

    Args:
        override: Explicit suffix (e.g. 'linux-x64'). Must be one of the
            supported suffixes. If None, the current platform is detected.

    Returns:
        Node.js artifact platform suffix

    Raises:
        UnsupportedPlatformError: If the override or the detected platform
            has no published artifact
    """
    if override:
        if override not in NODE_PLATFORM_SUFFIXES.values():
            raise UnsupportedPlatformError(
                f"Unknown platform '{override}'. "
                f"Supported: {', '.join(get_supported_platforms())}"
            )
        return override
    return detect_platform().node_suffix()


def is_supported_platform(info: Optional[PlatformInfo] = None) -> bool:
    """
    Check if a Node.js tarball is published for the platform.

    Args:
        info: PlatformInfo to check. If None, detects current platform.
    """
    if info is None:
        info = detect_platform()
    return (info.os, info.arch) in NODE_PLATFORM_SUFFIXES


def get_supported_platforms() -> list[str]:
    """Get list of all supported artifact suffixes."""
    return list(NODE_PLATFORM_SUFFIXES.values())


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "NODE_PLATFORM_SUFFIXES",
    "PlatformInfo",
    "detect_platform",
    "resolve_platform_suffix",
    "is_supported_platform",
    "get_supported_platforms",
    "clear_platform_cache",
]
