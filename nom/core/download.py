"""
Archive fetching over HTTP.

The whole archive is buffered in memory before it is handed to the installer.
The body is read in chunks only so progress can be reported while it arrives.

Failure modes:
- Connection, DNS and timeout failures raise ``NetworkError`` (optionally
  retried with exponential backoff)
- Non-2xx responses raise ``RemoteArchiveUnavailable`` and are never retried
"""

import io
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests
from requests.exceptions import RequestException

from .exceptions import NetworkError, RemoteArchiveUnavailable

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def fetch_archive(
    url: str,
    timeout: Optional[float] = None,
    max_retries: int = 0,
    session: Optional[requests.Session] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> bytes:
    """
    Fetch an archive and return its raw bytes.

    Args:
        url: URL to download from
        timeout: Request timeout in seconds (None blocks indefinitely)
        max_retries: Number of extra attempts after a network failure
        session: Optional requests session (``requests.get`` is used if None)
        progress_callback: Optional callback for progress updates

    Returns:
        Complete response body

    Raises:
        NetworkError: If the server cannot be reached
        RemoteArchiveUnavailable: If the server answers with a non-2xx status
        ValueError: If URL is empty

    Example:
        >>> data = fetch_archive("https://nodejs.org/dist/v18.19.0/node-v18.19.0-linux-x64.tar.gz")
    """
    if not url:
        raise ValueError("URL cannot be empty")

    http_get = session.get if session is not None else requests.get
    attempts = max_retries + 1

    for attempt in range(attempts):
        try:
            return _fetch_once(http_get, url, timeout, progress_callback)
        except NetworkError as e:
            if attempt == attempts - 1:
                raise

            backoff_seconds = 2**attempt
            logger.warning(
                f"Download attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)

    raise NetworkError(f"Failed to fetch {url}")


def _fetch_once(
    http_get: Callable[..., requests.Response],
    url: str,
    timeout: Optional[float],
    progress_callback: Optional[Callable[[DownloadProgress], None]],
) -> bytes:
    """Perform a single GET and buffer the body."""
    logger.info(f"Downloading {url}")

    try:
        response = http_get(url, stream=True, timeout=timeout, allow_redirects=True)
    except RequestException as e:
        raise NetworkError(f"Failed to reach {url}: {e}") from e

    with response:
        if not 200 <= response.status_code < 300:
            raise RemoteArchiveUnavailable(url, response.status_code)

        try:
            total_size = int(response.headers.get("content-length", 0))
        except ValueError:
            total_size = 0

        buffer = io.BytesIO()
        downloaded = 0
        start_time = time.time()

        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                buffer.write(chunk)
                downloaded += len(chunk)

                if progress_callback:
                    elapsed = time.time() - start_time
                    progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size if total_size > 0 else downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=downloaded / elapsed if elapsed > 0 else 0,
                        )
                    )
        except RequestException as e:
            raise NetworkError(f"Connection lost while downloading {url}: {e}") from e

    logger.debug(f"Fetched {downloaded} bytes from {url}")
    return buffer.getvalue()


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.percentage > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
