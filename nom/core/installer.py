"""
Archive installation: gzip decode, tar materialization and unpacking.

The decompressed tar container is written to a file inside a scoped
temporary directory that never overlaps the extraction target, and that
directory is removed whether extraction succeeds or fails. A failure while
unpacking leaves whatever was already extracted in place; there is no
rollback.
"""

import gzip
import logging
import tarfile
import zlib
from pathlib import Path
from typing import Optional, Union

from .exceptions import DecompressionFailed, FileWriteFailed, UnpackFailed
from .filesystem import (
    InsecureArchiveError,
    temporary_directory,
    validate_archive_link,
    validate_archive_member,
)

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "archive.tar"

GZIP_MAGIC = b"\x1f\x8b"


def decompress_archive(archive_bytes: bytes) -> bytes:
    """
    Decode gzip-compressed archive bytes.

    Args:
        archive_bytes: Raw ``.tar.gz`` bytes

    Returns:
        Uncompressed tar container bytes

    Raises:
        DecompressionFailed: If the data is not valid gzip or is truncated
    """
    if not archive_bytes.startswith(GZIP_MAGIC):
        raise DecompressionFailed("Archive is empty or not gzip data")

    try:
        return gzip.decompress(archive_bytes)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionFailed(f"Archive is not valid gzip data: {e}") from e


def write_tar_file(data: bytes, destination: Path) -> Path:
    """
    Write the decompressed tar container to disk.

    Raises:
        FileWriteFailed: If the file cannot be written
    """
    try:
        destination.write_bytes(data)
    except OSError as e:
        raise FileWriteFailed(f"Failed to write {destination}: {e}") from e
    return destination


def unpack_tar(tar_path: Path, destination: Path) -> int:
    """
    Extract every entry of an uncompressed tar file into ``destination``.

    Args:
        tar_path: Path to the tar container
        destination: Existing directory to extract into

    Returns:
        Number of members extracted

    Raises:
        UnpackFailed: If the container is malformed, contains unsafe paths,
            or an entry cannot be written
    """
    try:
        with tarfile.open(tar_path, "r:") as tar:
            members = tar.getmembers()

            for member in members:
                validate_archive_member(member.name, destination)
                if member.issym() or member.islnk():
                    validate_archive_link(member, destination)

            if hasattr(tarfile, "data_filter"):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError as e:
        raise UnpackFailed(str(e)) from e
    except (tarfile.TarError, OSError) as e:
        raise UnpackFailed(f"Failed to unpack {tar_path.name}: {e}") from e

    return len(members)


def install_archive(
    archive_bytes: bytes,
    install_path: Union[str, Path],
    archive_name: str = DEFAULT_ARCHIVE_NAME,
    temp_parent: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Decompress and unpack a ``.tar.gz`` archive into ``install_path``.

    Args:
        archive_bytes: Raw gzip-compressed tar bytes
        install_path: Existing directory to extract into
        archive_name: File name for the intermediate tar container
        temp_parent: Where to create the scoped temporary directory
            (system temp dir if None)

    Returns:
        The install path

    Raises:
        DecompressionFailed: If ``archive_bytes`` is not valid gzip
        FileWriteFailed: If the intermediate tar file cannot be written
        UnpackFailed: If the tar container cannot be extracted

    Example:
        >>> install_archive(data, Path.home() / ".nom" / "v18.19.0")
    """
    install_path = Path(install_path)

    tar_data = decompress_archive(archive_bytes)
    logger.debug(f"Decompressed {len(archive_bytes)} -> {len(tar_data)} bytes")

    try:
        with temporary_directory(prefix="nom_unpack_", parent=temp_parent) as temp_dir:
            tar_path = write_tar_file(tar_data, temp_dir / archive_name)
            del tar_data

            logger.info(f"Unpacking into {install_path}")
            count = unpack_tar(tar_path, install_path)
            logger.debug(f"Extracted {count} entries")
    except OSError as e:
        raise FileWriteFailed(f"Failed to create temporary directory: {e}") from e

    return install_path
