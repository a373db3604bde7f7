"""
Cross-platform file system utilities for setup-taskfile.

This module provides the file operations the installer needs:
- Archive extraction (zip, tar.gz) with directory traversal checks
- Safe file operations (atomic writes, safe deletion, tree copy)
"""

import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Union

from setup_taskfile.core.exceptions import ExtractError, InsecureArchiveError

IS_WINDOWS = os.name == "nt"


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not member_path.is_relative_to(destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path], kind: str
) -> None:
    """
    Extract an archive to a destination directory.

    Zip archives use zip extraction; every other kind is treated as
    gzip-compressed tar, matching the formats Taskfile ships.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to
        kind: Archive extension ('zip' or 'tar.gz')

    Raises:
        ExtractError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('task_linux_amd64.tar.gz', '/tmp/task', 'tar.gz')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        if kind == "zip":
            _extract_zip(archive_path, destination)
        else:
            _extract_tar_gz(archive_path, destination)
    except InsecureArchiveError:
        raise
    except (zipfile.BadZipFile, tarfile.TarError, EOFError, OSError) as e:
        raise ExtractError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()

        for member in members:
            _validate_archive_path(member, destination)

        zf.extractall(destination)


def _extract_tar_gz(archive_path: Path, destination: Path) -> None:
    """Extract a .tar.gz archive."""
    with tarfile.open(archive_path, "r:gz") as tar:
        for member in tar.getmembers():
            _validate_archive_path(member.name, destination)

        # Extract with filter for security (Python 3.12+)
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    Example:
        >>> atomic_write('task.complete', '')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not path.is_relative_to(require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, 0o777)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def recursive_copy(source: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Recursively copy a directory tree, preserving file metadata.

    Example:
        >>> recursive_copy('/tmp/extract', '/opt/hostedtoolcache/task/3.46.4/amd64')
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        raise FilesystemError(f"Source does not exist: {source}")

    if not source.is_dir():
        raise FilesystemError(f"Source is not a directory: {source}")

    destination.mkdir(parents=True, exist_ok=True)

    for item in source.rglob("*"):
        dest_item = destination / item.relative_to(source)

        if item.is_dir():
            dest_item.mkdir(parents=True, exist_ok=True)
        else:
            dest_item.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest_item)  # copy2 preserves the executable bit


__all__ = [
    "FilesystemError",
    "extract_archive",
    "atomic_write",
    "safe_rmtree",
    "recursive_copy",
]
