"""
Centralized exception hierarchy for nom.

Every stage of the install pipeline raises one of these exceptions instead of
terminating the process. The CLI is the only place that turns them into a
message and an exit code, using the ``exit_code`` carried by each class.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class NomError(Exception):
    """Base exception for all nom errors."""

    exit_code = 1


# ============================================================================
# Input and Environment Exceptions
# ============================================================================


class InvalidVersionError(NomError):
    """Version tag is empty or contains characters unsafe for paths/URLs."""

    exit_code = 2

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"Invalid version '{version}': only letters, digits, '.' and '-' are allowed"
        )


class ConfigError(NomError):
    """Configuration file or environment value is invalid."""

    exit_code = 3


class UnsupportedPlatformError(NomError):
    """No Node.js artifact exists for the detected OS/architecture."""

    exit_code = 4


# ============================================================================
# Path Resolver Exceptions
# ============================================================================


class NoHomeDirectory(NomError):
    """The user's home directory cannot be determined."""

    exit_code = 10


class DirectoryCreationFailed(NomError):
    """The install directory could not be created."""

    exit_code = 11

    def __init__(self, path, os_error: Optional[OSError] = None):
        self.path = path
        self.os_error = os_error
        msg = f"Failed to create install directory {path}"
        if os_error is not None:
            msg += f": {os_error}"
        super().__init__(msg)


# ============================================================================
# Archive Fetcher Exceptions
# ============================================================================


class NetworkError(NomError):
    """Connection, DNS or timeout failure while fetching an archive."""

    exit_code = 20


class RemoteArchiveUnavailable(NomError):
    """The distribution server answered with a non-success status."""

    exit_code = 21

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Archive not available at {url} (HTTP {status_code})")


# ============================================================================
# Archive Installer Exceptions
# ============================================================================


class ArchiveError(NomError):
    """Base exception for archive installation errors."""

    pass


class DecompressionFailed(ArchiveError):
    """Archive bytes are not valid gzip data or are truncated."""

    exit_code = 30


class FileWriteFailed(ArchiveError):
    """The intermediate tar file could not be written."""

    exit_code = 31


class UnpackFailed(ArchiveError):
    """The tar container is malformed or an entry could not be written."""

    exit_code = 32
