"""Runtime configuration for kubev-installer.

There is no configuration file. Values come from the environment, and the
CLI may override them with explicit flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

BINARY_NAME = "kubev-downloader"
GITHUB_REPO = "kubermatic/kubev-downloader"

DOWNLOAD_BASE_URL = "https://github.com"
API_BASE_URL = "https://api.github.com"

# Environment variable that pins a release tag (unset or empty: latest)
VERSION_ENV = "KUBEV_VERSION"

# Environment variable naming the target directory for the binary
INSTALL_DIR_ENV = "INSTALL_DIR"

DEFAULT_INSTALL_DIR = "."


@dataclass(frozen=True)
class InstallerConfig:
    """Resolved settings for a single install run.

    Attributes:
        pinned_version: Release tag to install verbatim, or None for latest.
        install_dir: Directory that receives the binary.
        binary_name: Executable name inside the archive and on disk.
        repo: GitHub ``owner/name`` publishing the releases.
        download_base_url: Host serving release downloads.
        api_base_url: Host serving the releases API.
    """

    pinned_version: Optional[str] = None
    install_dir: Path = Path(DEFAULT_INSTALL_DIR)
    binary_name: str = BINARY_NAME
    repo: str = GITHUB_REPO
    download_base_url: str = DOWNLOAD_BASE_URL
    api_base_url: str = API_BASE_URL

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        version: Optional[str] = None,
        install_dir: Optional[str] = None,
    ) -> "InstallerConfig":
        """Build a config from environment variables.

        Resolution order for each setting:
        1. Explicit argument (from the CLI), if given
        2. Environment variable, if set and non-empty
        3. Default

        Args:
            environ: Environment mapping (defaults to os.environ).
            version: Explicit release tag override.
            install_dir: Explicit install directory override.

        Returns:
            InstallerConfig for this run.
        """
        env = os.environ if environ is None else environ

        pinned = version or env.get(VERSION_ENV) or None
        target = install_dir or env.get(INSTALL_DIR_ENV) or DEFAULT_INSTALL_DIR

        return cls(pinned_version=pinned, install_dir=Path(target))

    @property
    def install_path(self) -> Path:
        """Final location of the installed binary."""
        return self.install_dir / self.binary_name
