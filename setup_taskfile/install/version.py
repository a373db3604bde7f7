"""
Version resolution for Taskfile.

Turns the requested version input into the normalized version used in cache
keys and download URLs, asking the release registry when 'latest' is
requested.
"""

import logging

from setup_taskfile.core.exceptions import InvalidVersionError, VersionLookupError
from setup_taskfile.core.interfaces import ReleaseRegistry
from setup_taskfile.install.locator import REPO_NAME, REPO_OWNER

logger = logging.getLogger(__name__)

LATEST = "latest"


def normalize_version(version: str) -> str:
    """
    Remove one leading 'v' from a version.

    Example:
        >>> normalize_version('v3.46.4')
        '3.46.4'
        >>> normalize_version('3.46.4')
        '3.46.4'
    """
    return version[1:] if version.startswith("v") else version


def is_latest(version: str) -> bool:
    """True when the request asks for the newest release."""
    return not version.strip() or version.strip().lower() == LATEST


def resolve_version(requested: str, registry: ReleaseRegistry) -> str:
    """
    Resolve a requested version to a normalized version string.

    Explicit versions are only stripped of a leading 'v'; their shape is not
    validated. 'latest' (any case, or an empty request) queries the registry
    once.

    Args:
        requested: Version input (e.g., "3.46.4", "v3.46.4", "latest")
        registry: Release registry used for 'latest'

    Returns:
        Normalized version (e.g., "3.46.4")

    Raises:
        VersionLookupError: If the latest release cannot be fetched
        InvalidVersionError: If the version normalizes to an empty string
    """
    if is_latest(requested):
        logger.info("Fetching latest version...")
        version = normalize_version(_latest_tag(registry))
        logger.info(f"Latest version: {version}")
    else:
        version = normalize_version(requested.strip())

    if not version:
        raise InvalidVersionError(f"Invalid version: '{requested}'")

    return version


def _latest_tag(registry: ReleaseRegistry) -> str:
    try:
        return registry.latest_tag(REPO_OWNER, REPO_NAME)
    except Exception as e:
        raise VersionLookupError(f"Failed to fetch latest version: {e}") from e
