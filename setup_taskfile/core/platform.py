"""
Platform detection for setup-taskfile.

This module maps the host operating system and CPU architecture to the names
used by Taskfile release assets, and picks the archive format for the OS.

Usage:
    from setup_taskfile.core.platform import resolve_platform

    platform_info = resolve_platform()
    print(f"OS: {platform_info.os}")
    print(f"Architecture: {platform_info.arch}")
    print(f"Archive: {platform_info.ext}")
"""

import platform
from dataclasses import dataclass
from typing import Optional

from setup_taskfile.core.exceptions import (
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
)

# Host OS name -> (release OS name, archive extension)
OS_MAP = {
    "linux": ("linux", "tar.gz"),
    "darwin": ("darwin", "tar.gz"),
    "windows": ("windows", "zip"),
    "freebsd": ("freebsd", "tar.gz"),
}

SUPPORTED_OS = ("linux", "darwin", "windows", "freebsd")
SUPPORTED_ARCH = ("amd64", "arm64", "arm", "386")


@dataclass(frozen=True)
class PlatformTuple:
    """
    Release naming for the host platform.

    Attributes:
        os: Release OS name ('linux', 'darwin', 'windows', 'freebsd')
        arch: Release architecture name ('amd64', 'arm64', 'arm', '386')
        ext: Archive extension ('tar.gz' or 'zip')
    """

    os: str
    arch: str
    ext: str

    def platform_string(self) -> str:
        """
        Get platform string as used in release asset names.

        Example:
            >>> PlatformTuple('linux', 'amd64', 'tar.gz').platform_string()
            'linux_amd64'
        """
        return f"{self.os}_{self.arch}"

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


def resolve_platform(
    system: Optional[str] = None, machine: Optional[str] = None
) -> PlatformTuple:
    """
    Resolve the release platform tuple for a host.

    Args:
        system: OS identifier (default: platform.system())
        machine: Architecture identifier (default: platform.machine())

    Returns:
        PlatformTuple for the host

    Raises:
        UnsupportedPlatformError: If the OS has no Taskfile release
        UnsupportedArchitectureError: If the architecture has no Taskfile release

    Example:
        >>> resolve_platform("Linux", "x86_64")
        PlatformTuple(os='linux', arch='amd64', ext='tar.gz')
    """
    if system is None:
        system = platform.system()
    if machine is None:
        machine = platform.machine()

    os_name, ext = _map_os(system)
    arch = _map_architecture(machine)

    return PlatformTuple(os=os_name, arch=arch, ext=ext)


def _map_os(system: str) -> tuple:
    """
    Map an OS identifier to (release OS name, archive extension).

    Raises:
        UnsupportedPlatformError: If OS is not supported
    """
    key = system.strip().lower()
    # Python on Windows reports 'Windows'; Node-style callers pass 'win32'
    if key in ("win32", "cygwin", "msys"):
        key = "windows"

    try:
        return OS_MAP[key]
    except KeyError:
        raise UnsupportedPlatformError(system) from None


def _map_architecture(machine: str) -> str:
    """
    Map an architecture identifier to its release name.

    Raises:
        UnsupportedArchitectureError: If architecture is not supported
    """
    key = machine.strip().lower()

    if key in ("x86_64", "amd64", "x64"):
        return "amd64"
    elif key in ("aarch64", "arm64") or key.startswith("armv8"):
        return "arm64"
    elif key == "arm" or key.startswith(("armv6", "armv7")):
        return "arm"
    elif key in ("i386", "i486", "i586", "i686", "x86", "ia32"):
        return "386"
    else:
        raise UnsupportedArchitectureError(machine)


__all__ = [
    "PlatformTuple",
    "resolve_platform",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
]
