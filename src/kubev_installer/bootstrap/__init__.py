"""
Bootstrap module for installing the kubev-downloader binary.

This module handles:
- Runtime dependency checks
- Platform detection (OS + architecture)
- Release version resolution
- Asset download, checksum verification and extraction
"""

from kubev_installer.bootstrap.installer import Installer, InstallResult
from kubev_installer.bootstrap.platform import get_platform_info, PlatformInfo
from kubev_installer.bootstrap.versions import resolve_version

__all__ = [
    "Installer",
    "InstallResult",
    "get_platform_info",
    "PlatformInfo",
    "resolve_version",
]
