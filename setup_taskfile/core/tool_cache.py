"""
Persistent tool cache keyed by (tool, version, arch).

Entries follow the runner tool-cache layout so they are shared with other
setup steps on the same machine:

    <root>/<tool>/<version>/<arch>/           installed files
    <root>/<tool>/<version>/<arch>.complete   marker written last

An entry without its marker is treated as a miss. Writers hold a per-entry
file lock so concurrent jobs populating the same key are serialized.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from filelock import FileLock, Timeout

from setup_taskfile.core.exceptions import CacheLockTimeout, CacheWriteError
from setup_taskfile.core.filesystem import (
    FilesystemError,
    atomic_write,
    recursive_copy,
    safe_rmtree,
)
from setup_taskfile.core.interfaces import CacheStore

logger = logging.getLogger(__name__)


class ToolCache(CacheStore):
    """
    Manages installed tool directories under a cache root.

    Example:
        >>> cache = ToolCache(Path('/opt/hostedtoolcache'))
        >>> path = cache.find('task', '3.46.4', 'amd64')
        >>> if path is None:
        ...     path = cache.put(Path('/tmp/extracted'), 'task', '3.46.4', 'amd64')
    """

    def __init__(self, root: Path, lock_timeout: int = 60):
        """
        Initialize tool cache.

        Args:
            root: Cache root directory
            lock_timeout: Timeout in seconds for acquiring an entry lock
        """
        self.root = Path(root)
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root}")

    def entry_path(self, tool: str, version: str, arch: str) -> Path:
        """Get the directory an entry lives in."""
        return self.root / tool / version / arch

    def marker_path(self, tool: str, version: str, arch: str) -> Path:
        """Get the completion marker for an entry."""
        return self.root / tool / version / f"{arch}.complete"

    def find(self, tool: str, version: str, arch: str) -> Optional[Path]:
        """
        Look up a completed entry.

        Returns:
            Path to the cached directory, or None if missing or incomplete
        """
        if not tool or not version:
            return None

        entry = self.entry_path(tool, version, arch)
        marker = self.marker_path(tool, version, arch)

        if entry.is_dir() and marker.is_file():
            logger.debug(f"Tool cache hit: {entry}")
            return entry

        logger.debug(f"Tool cache miss: {tool} {version} {arch}")
        return None

    def put(self, source_dir: Path, tool: str, version: str, arch: str) -> Path:
        """
        Copy a directory into the cache and mark it complete.

        Args:
            source_dir: Directory holding the extracted tool
            tool: Tool name
            version: Normalized version
            arch: Release architecture name

        Returns:
            Canonical path of the cached directory

        Raises:
            CacheWriteError: If the entry cannot be written
            CacheLockTimeout: If the entry lock cannot be acquired
        """
        source_dir = Path(source_dir)
        entry = self.entry_path(tool, version, arch)
        marker = self.marker_path(tool, version, arch)

        logger.debug(f"Caching {source_dir} as {tool} {version} {arch}")

        with self._lock(tool, version, arch):
            try:
                marker.unlink(missing_ok=True)
                safe_rmtree(entry, require_prefix=self.root)

                recursive_copy(source_dir, entry)
                atomic_write(marker, "")

            except (OSError, FilesystemError, ValueError) as e:
                logger.debug(f"Failed to write cache entry {entry}: {e}")
                raise CacheWriteError(
                    f"Failed to cache {tool} {version} at {entry}: {e}"
                ) from e

        logger.info(f"Cached {tool} {version} at {entry}")
        return entry

    def list_versions(self, tool: str, arch: str) -> List[str]:
        """
        Get all completed versions of a tool for an architecture.

        Returns:
            Sorted list of cached version strings
        """
        tool_dir = self.root / tool
        if not tool_dir.is_dir():
            return []

        return sorted(
            child.name
            for child in tool_dir.iterdir()
            if child.is_dir() and self.find(tool, child.name, arch) is not None
        )

    @contextmanager
    def _lock(self, tool: str, version: str, arch: str):
        """
        Context manager for entry locking.

        Raises:
            CacheLockTimeout: If lock cannot be acquired within timeout
        """
        lock_path = self.root / tool / version / f"{arch}.lock"

        try:
            lock_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheWriteError(
                f"Failed to create cache directory {lock_path.parent}: {e}"
            ) from e

        lock = FileLock(lock_path, timeout=self.lock_timeout)

        try:
            with lock:
                logger.debug(f"Acquired cache lock: {lock_path}")
                yield
            logger.debug(f"Released cache lock: {lock_path}")

        except Timeout as e:
            logger.debug(f"Failed to acquire cache lock within {self.lock_timeout}s")
            raise CacheLockTimeout(
                f"Could not acquire cache lock {lock_path} within "
                f"{self.lock_timeout} seconds"
            ) from e


__all__ = ["ToolCache"]
