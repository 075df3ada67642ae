"""
Version tag validation.

Version tags are used verbatim as a directory name and inside the download
URL, so they are checked against an allow-list before anything else runs.
"""

import re

from .exceptions import InvalidVersionError

VERSION_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9.\-]*")


def validate_version(version: str) -> str:
    """
    Validate a version tag and return it unchanged.

    Args:
        version: Caller-supplied version tag (e.g. 'v18.19.0')

    Returns:
        The same version string

    Raises:
        InvalidVersionError: If the tag is empty or contains disallowed characters

    Example:
        >>> validate_version("v18.19.0")
        'v18.19.0'
    """
    if not isinstance(version, str) or not VERSION_PATTERN.fullmatch(version):
        raise InvalidVersionError(str(version))
    return version

