"""
Download and extraction of release archives.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import requests

from setup_taskfile.core.download import DownloadProgress, download_file
from setup_taskfile.core.filesystem import extract_archive
from setup_taskfile.core.interfaces import ArchiveFetcher

logger = logging.getLogger(__name__)


class HttpArchiveFetcher(ArchiveFetcher):
    """
    Fetch archives over HTTP into a scratch directory.

    Every download and extraction gets its own fresh directory under
    temp_dir. Nothing is removed afterwards; the runner clears its temp
    directory between jobs.
    """

    def __init__(
        self,
        temp_dir: Path,
        timeout: int = 30,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize fetcher.

        Args:
            temp_dir: Scratch directory (RUNNER_TEMP on a runner)
            timeout: Request timeout in seconds
            max_retries: Download attempts for transient failures
            session: requests session to reuse (optional)
        """
        self.temp_dir = Path(temp_dir)
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session

    def download(self, url: str) -> Path:
        """
        Download a URL, keeping its file name.

        Raises:
            DownloadError: On transport error or non-success status
        """
        archive_name = url.rstrip("/").split("/")[-1]
        destination = self._scratch_dir() / archive_name

        logger.info(f"Downloading Taskfile from {url}")
        return download_file(
            url,
            destination,
            progress_callback=_log_progress,
            timeout=self.timeout,
            max_retries=self.max_retries,
            session=self.session,
        )

    def extract(self, archive: Path, kind: str) -> Path:
        """
        Extract an archive into a fresh directory.

        Raises:
            ExtractError: On corrupt or unsupported content
        """
        destination = self._scratch_dir()

        logger.debug(f"Extracting {archive} to {destination}")
        extract_archive(archive, destination, kind)
        return destination

    def _scratch_dir(self) -> Path:
        path = self.temp_dir / str(uuid.uuid4())
        path.mkdir(parents=True, exist_ok=True)
        return path


def _log_progress(progress: DownloadProgress):
    logger.debug(f"Downloaded {progress}")
