"""
Cache-aware Taskfile installer.

Looks the requested version up in the tool cache and only downloads,
extracts and caches the release archive on a miss.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from setup_taskfile.core.interfaces import ArchiveFetcher, CacheStore
from setup_taskfile.core.platform import PlatformTuple
from setup_taskfile.install.locator import TOOL_NAME, get_download_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallationResult:
    """
    Outcome of an installation.

    Attributes:
        installed_path: Directory holding the task binary
        cache_hit: Whether the version was already in the tool cache
        version: Normalized version that was installed
    """

    installed_path: Path
    cache_hit: bool
    version: str


class CachedInstaller:
    """
    Install Taskfile through a tool cache.

    Example:
        >>> installer = CachedInstaller(ToolCache(root), HttpArchiveFetcher(tmp))
        >>> result = installer.install('3.46.4', resolve_platform())
        >>> result.cache_hit
        False
    """

    def __init__(self, cache: CacheStore, fetcher: ArchiveFetcher):
        self.cache = cache
        self.fetcher = fetcher

    def install(self, version: str, platform: PlatformTuple) -> InstallationResult:
        """
        Return a cached installation, downloading it first on a miss.

        Args:
            version: Normalized version
            platform: Platform tuple for the host

        Returns:
            InstallationResult for the version

        Raises:
            DownloadError: If the archive cannot be downloaded
            ExtractError: If the archive cannot be extracted
            CacheWriteError: If the extracted tool cannot be cached
        """
        cached = self.cache.find(TOOL_NAME, version, platform.arch)
        if cached:
            logger.info(f"Found Taskfile {version} in tool cache")
            return InstallationResult(
                installed_path=Path(cached), cache_hit=True, version=version
            )

        logger.info(f"Taskfile {version} not found in cache, downloading...")
        available = self.cache.list_versions(TOOL_NAME, platform.arch)
        if available:
            logger.debug(f"Cached Taskfile versions: {', '.join(available)}")

        url = get_download_url(version, platform)
        archive = self.fetcher.download(url)
        extracted = self.fetcher.extract(archive, platform.ext)
        installed = self.cache.put(extracted, TOOL_NAME, version, platform.arch)

        return InstallationResult(
            installed_path=Path(installed), cache_hit=False, version=version
        )
