"""
Network download with progress tracking and retry logic.

This module provides the HTTP download used for release archives:
- HTTP/HTTPS downloads with TLS verification and redirects
- Streaming to disk in chunks
- Progress reporting (bytes, percentage, speed, ETA)
- Retry with exponential backoff for transient failures
- Timeout handling
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from setup_taskfile.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

# Status codes worth another attempt; other 4xx responses fail immediately.
RETRYABLE_STATUS_CODES = frozenset({408, 429})


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: int = 30,
    max_retries: int = 3,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download file from URL to destination with retry logic.

    Args:
        url: URL to download from
        destination: Local path to save file
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts
        session: Optional requests session (default: module-level requests)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails after retries or with a client error
        ValueError: If URL or destination is invalid

    Example:
        >>> from setup_taskfile.core.download import download_file
        >>> url = "https://github.com/go-task/task/releases/download/v3.46.4/task_linux_amd64.tar.gz"
        >>> download_file(url, Path("/tmp/task_linux_amd64.tar.gz"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    http = session or requests

    for attempt in range(max_retries):
        try:
            return _download_with_progress(
                http=http,
                url=url,
                destination=destination,
                progress_callback=progress_callback,
                timeout=timeout,
            )
        except HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            if not _is_retryable_status(status):
                raise DownloadError(
                    f"Failed to download {url}: HTTP {status}"
                ) from e
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download failed after {max_retries} attempts: {e}"
                ) from e
            _backoff(attempt, e)
        except (Timeout, ConnectionError, RequestException, OSError) as e:
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download failed after {max_retries} attempts: {e}"
                ) from e
            _backoff(attempt, e)

    raise DownloadError(f"Download failed for unknown reason: {url}")


def _is_retryable_status(status: int) -> bool:
    return status >= 500 or status in RETRYABLE_STATUS_CODES


def _backoff(attempt: int, error: Exception):
    backoff_seconds = 2**attempt
    logger.warning(
        f"Download attempt {attempt + 1} failed: {error}. "
        f"Retrying in {backoff_seconds}s..."
    )
    time.sleep(backoff_seconds)


def _download_with_progress(
    http,
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
    timeout: int,
) -> Path:
    """
    Perform download with streaming and progress updates.

    This is an internal function called by download_file().

    Raises:
        RequestException: If HTTP request fails
    """
    logger.debug(f"GET {url}")

    response = http.get(url, stream=True, timeout=timeout, allow_redirects=True)
    response.raise_for_status()

    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            if not chunk:
                continue
            f.write(chunk)
            downloaded += len(chunk)

            # Report progress at most once per 0.5 seconds
            current_time = time.time()
            if progress_callback and (
                current_time - last_progress_time >= 0.5 or downloaded == total_size
            ):
                elapsed = current_time - start_time
                speed = downloaded / elapsed if elapsed > 0 else 0
                remaining = total_size - downloaded if total_size > 0 else 0
                eta = remaining / speed if speed > 0 else 0

                progress_callback(
                    DownloadProgress(
                        bytes_downloaded=downloaded,
                        total_bytes=total_size if total_size > 0 else downloaded,
                        percentage=(downloaded / total_size * 100)
                        if total_size > 0
                        else 0,
                        speed_bps=speed,
                        eta_seconds=eta,
                    )
                )
                last_progress_time = current_time

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
