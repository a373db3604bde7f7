"""
Release asset locations for Taskfile.
"""

from setup_taskfile.core.platform import PlatformTuple

TOOL_NAME = "task"
REPO_OWNER = "go-task"
REPO_NAME = "task"
RELEASES_URL = f"https://github.com/{REPO_OWNER}/{REPO_NAME}/releases/download"


def get_archive_name(platform: PlatformTuple) -> str:
    """
    Get the release asset file name for a platform.

    Example:
        >>> get_archive_name(PlatformTuple('windows', 'arm64', 'zip'))
        'task_windows_arm64.zip'
    """
    return f"task_{platform.os}_{platform.arch}.{platform.ext}"


def get_download_url(version: str, platform: PlatformTuple) -> str:
    """
    Get the download URL of the release archive.

    The URL is not checked; a version without a release surfaces as a
    download failure.

    Args:
        version: Normalized version without a leading 'v'
        platform: Platform tuple for the host

    Example:
        >>> get_download_url('3.46.4', PlatformTuple('linux', 'amd64', 'tar.gz'))
        'https://github.com/go-task/task/releases/download/v3.46.4/task_linux_amd64.tar.gz'
    """
    return f"{RELEASES_URL}/v{version}/{get_archive_name(platform)}"
