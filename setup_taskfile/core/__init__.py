"""
Core functionality for setup-taskfile.

This package contains the foundational modules the install steps depend on.
"""

from .platform import (
    PlatformTuple,
    resolve_platform,
    SUPPORTED_OS,
    SUPPORTED_ARCH,
)

from .interfaces import (
    CacheStore,
    ReleaseRegistry,
    ArchiveFetcher,
)

from .tool_cache import (
    ToolCache,
)

from .exceptions import (
    SetupTaskfileError,
    ConfigurationError,
    UnexpectedError,
    UnsupportedPlatformError,
    UnsupportedArchitectureError,
    VersionLookupError,
    ReleaseRegistryError,
    InvalidVersionError,
    DownloadError,
    ExtractError,
    InsecureArchiveError,
    CacheWriteError,
    CacheLockTimeout,
    PathPublishError,
    VerificationError,
)

__all__ = [
    "PlatformTuple",
    "resolve_platform",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
    "CacheStore",
    "ReleaseRegistry",
    "ArchiveFetcher",
    "ToolCache",
    "SetupTaskfileError",
    "ConfigurationError",
    "UnexpectedError",
    "UnsupportedPlatformError",
    "UnsupportedArchitectureError",
    "VersionLookupError",
    "ReleaseRegistryError",
    "InvalidVersionError",
    "DownloadError",
    "ExtractError",
    "InsecureArchiveError",
    "CacheWriteError",
    "CacheLockTimeout",
    "PathPublishError",
    "VerificationError",
]
