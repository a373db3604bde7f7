"""
Centralized exception hierarchy for setup-taskfile.

Every failure raised by a setup step derives from SetupTaskfileError so the
runner can turn it into a single failure message at one boundary.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SetupTaskfileError(Exception):
    """Base exception for all setup-taskfile errors."""

    pass


class ConfigurationError(SetupTaskfileError):
    """Raised when inputs or the config file cannot be loaded."""

    pass


class UnexpectedError(SetupTaskfileError):
    """Wraps any error that none of the setup steps classified."""

    pass


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedPlatformError(SetupTaskfileError):
    """Raised when the host operating system has no Taskfile release."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Unsupported platform: {system}")


class UnsupportedArchitectureError(SetupTaskfileError):
    """Raised when the host CPU architecture has no Taskfile release."""

    def __init__(self, machine: str):
        self.machine = machine
        super().__init__(f"Unsupported architecture: {machine}")


# ============================================================================
# Version Exceptions
# ============================================================================


class VersionLookupError(SetupTaskfileError):
    """Raised when the latest release cannot be determined."""

    pass


class ReleaseRegistryError(VersionLookupError):
    """Raised by the release registry client on API or transport failure."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class InvalidVersionError(SetupTaskfileError):
    """Raised when a version normalizes to an empty string."""

    pass


# ============================================================================
# Install Exceptions
# ============================================================================


class DownloadError(SetupTaskfileError):
    """Raised when the release archive cannot be downloaded."""

    pass


class ExtractError(SetupTaskfileError):
    """Raised when the release archive cannot be extracted."""

    pass


class InsecureArchiveError(ExtractError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class CacheWriteError(SetupTaskfileError):
    """Raised when an extracted tool cannot be stored in the tool cache."""

    pass


class CacheLockTimeout(CacheWriteError):
    """Raised when the cache entry lock cannot be acquired within timeout."""

    pass


class PathPublishError(SetupTaskfileError):
    """Raised when the tool directory cannot be added to PATH."""

    pass


class VerificationError(SetupTaskfileError):
    """Raised when the installed binary does not run."""

    pass
