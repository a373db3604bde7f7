"""
Taskfile installation steps: version resolution, asset location, download,
caching and verification.
"""

from .locator import (
    TOOL_NAME,
    REPO_OWNER,
    REPO_NAME,
    get_archive_name,
    get_download_url,
)
from .version import normalize_version, resolve_version
from .fetcher import HttpArchiveFetcher
from .installer import CachedInstaller, InstallationResult
from .verifier import verify_installation

__all__ = [
    "TOOL_NAME",
    "REPO_OWNER",
    "REPO_NAME",
    "get_archive_name",
    "get_download_url",
    "normalize_version",
    "resolve_version",
    "HttpArchiveFetcher",
    "CachedInstaller",
    "InstallationResult",
    "verify_installation",
]
