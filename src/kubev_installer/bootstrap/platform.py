"""Platform detection for kubev-downloader release artifacts.

Maps the host OS and architecture onto the tag used in archive names.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Optional

from kubev_installer.core.errors import UnsupportedPlatformError

# Raw platform.system() values → release OS tag
_OS_MAP = {
    "Linux": "linux",
    "Darwin": "darwin",
}

# Raw platform.machine() values → release architecture tag
_ARCH_MAP = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def normalize_os(system: str) -> Optional[str]:
    """Normalize an operating system name, or None if unknown."""
    return _OS_MAP.get(system)


def normalize_arch(machine: str) -> Optional[str]:
    """Normalize an architecture name, or None if unknown."""
    return _ARCH_MAP.get(machine)


def detect_os(system: Optional[str] = None) -> str:
    """Detect the current operating system.

    Args:
        system: Raw OS name; defaults to platform.system().

    Returns:
        Release OS tag (linux or darwin).

    Raises:
        UnsupportedPlatformError: If the OS has no release artifact.
    """
    raw = platform.system() if system is None else system
    normalized = normalize_os(raw)
    if normalized is None:
        raise UnsupportedPlatformError(f"Unsupported operating system: {raw}")
    return normalized


def detect_arch(machine: Optional[str] = None) -> str:
    """Detect the current CPU architecture.

    Args:
        machine: Raw architecture name; defaults to platform.machine().

    Returns:
        Release architecture tag (amd64 or arm64).

    Raises:
        UnsupportedPlatformError: If the architecture has no release artifact.
    """
    raw = platform.machine() if machine is None else machine
    normalized = normalize_arch(raw)
    if normalized is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {raw}")
    return normalized


@dataclass(frozen=True)
class PlatformInfo:
    """Information about the current platform.

    Attributes:
        os: Operating system (linux, darwin).
        arch: CPU architecture (amd64, arm64).
    """

    os: str
    arch: str

    @property
    def tag(self) -> str:
        """Return the platform tag used in archive names.

        Example: "darwin-arm64", "linux-amd64"
        """
        return f"{self.os}-{self.arch}"


def get_platform_info(
    system: Optional[str] = None, machine: Optional[str] = None
) -> PlatformInfo:
    """Detect and return current platform information.

    Raises:
        UnsupportedPlatformError: If the platform is not supported.
    """
    return PlatformInfo(os=detect_os(system), arch=detect_arch(machine))
