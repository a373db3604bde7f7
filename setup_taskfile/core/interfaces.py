"""
Core interfaces for setup-taskfile.

This module defines the abstract collaborators the runner depends on. The
default implementations talk to the GitHub API, the network and the runner's
tool cache; tests substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class CacheStore(ABC):
    """
    Abstract interface for the persistent tool cache.

    Entries are keyed by (tool, version, arch) and map to an installation
    directory.
    """

    @abstractmethod
    def find(self, tool: str, version: str, arch: str) -> Optional[Path]:
        """
        Look up a cached installation.

        Args:
            tool: Tool name (e.g., "task")
            version: Normalized version (e.g., "3.46.4")
            arch: Release architecture name (e.g., "amd64")

        Returns:
            Path to the cached directory, or None on a miss
        """
        pass

    @abstractmethod
    def put(self, source_dir: Path, tool: str, version: str, arch: str) -> Path:
        """
        Store a directory in the cache.

        Args:
            source_dir: Directory holding the extracted tool
            tool: Tool name
            version: Normalized version
            arch: Release architecture name

        Returns:
            Canonical path of the cached directory

        Raises:
            CacheWriteError: If the entry cannot be written
        """
        pass

    def list_versions(self, tool: str, arch: str) -> List[str]:
        """
        Get the versions of a tool held in the cache.

        Stores that cannot enumerate their entries return an empty list.
        """
        return []


class ReleaseRegistry(ABC):
    """Abstract interface for looking up published releases."""

    @abstractmethod
    def latest_tag(self, owner: str, repo: str) -> str:
        """
        Get the tag of the most recent release.

        Args:
            owner: Repository owner (e.g., "go-task")
            repo: Repository name (e.g., "task")

        Returns:
            Release tag as published (e.g., "v3.46.4")

        Raises:
            ReleaseRegistryError: If the lookup fails for any reason
        """
        pass


class ArchiveFetcher(ABC):
    """Abstract interface for downloading and unpacking release archives."""

    @abstractmethod
    def download(self, url: str) -> Path:
        """
        Download a URL to a temporary file.

        Raises:
            DownloadError: On transport error or non-success status
        """
        pass

    @abstractmethod
    def extract(self, archive: Path, kind: str) -> Path:
        """
        Extract an archive into a fresh directory.

        Args:
            archive: Path to the downloaded archive
            kind: Archive extension ('zip' or 'tar.gz')

        Returns:
            Directory holding the extracted content

        Raises:
            ExtractError: On corrupt or unsupported content
        """
        pass


__all__ = [
    "CacheStore",
    "ReleaseRegistry",
    "ArchiveFetcher",
]
