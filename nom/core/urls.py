"""Download URL construction for Node.js distribution archives."""

NODE_DIST_URL = "https://nodejs.org/dist"
ARTIFACT_NAME = "node"


def build_url(version: str, platform: str, base_url: str = NODE_DIST_URL) -> str:
    """
    Build the download URL for a Node.js release archive.

    Args:
        version: Version tag (e.g. 'v18.19.0')
        platform: Artifact platform suffix (e.g. 'linux-x64')
        base_url: Distribution server base URL

    Returns:
        Fully qualified ``.tar.gz`` URL

    Example:
        >>> build_url("v1.0.0", "darwin-x64")
        'https://nodejs.org/dist/v1.0.0/node-v1.0.0-darwin-x64.tar.gz'
    """
    base = base_url.rstrip("/")
    return f"{base}/{version}/{ARTIFACT_NAME}-{version}-{platform}.tar.gz"


def archive_name(version: str, platform: str) -> str:
    """Return the archive file name for a version/platform pair."""
    return build_url(version, platform).rsplit("/", 1)[-1]
