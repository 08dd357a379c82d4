"""Install pipeline orchestration.

Runs the stages in a fixed order:

    CHECK_DEPS → DETECT_PLATFORM → RESOLVE_VERSION → DOWNLOAD → VERIFY
    → EXTRACT → INSTALL → DONE

Values flow between stages as plain arguments. Downloads and extraction
happen inside a temporary workspace that is removed on every exit path.
"""

from __future__ import annotations

import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from kubev_installer.bootstrap.archive import (
    extract_zip,
    install_binary,
    locate_binary,
    make_executable,
)
from kubev_installer.bootstrap.download import ReleaseAssets, download_file, fetch_json
from kubev_installer.bootstrap.integrity import verify_archive
from kubev_installer.bootstrap.platform import PlatformInfo, get_platform_info
from kubev_installer.bootstrap.requirements import Requirement, check_requirements
from kubev_installer.bootstrap.versions import resolve_version
from kubev_installer.config import InstallerConfig
from kubev_installer.core.errors import InstallError
from kubev_installer.core.logging import get_logger
from kubev_installer.core.stages import Stage

LOGGER = get_logger(__name__)

WORKSPACE_PREFIX = "kubev-installer-"


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a successful install."""

    binary_path: Path
    version: str
    platform: str


class Installer:
    """Downloads, verifies and installs one release of the binary."""

    def __init__(
        self,
        config: InstallerConfig,
        *,
        requirements: Optional[Iterable[Requirement]] = None,
        detect_platform: Callable[[], PlatformInfo] = get_platform_info,
        fetch: Callable[[str], Any] = fetch_json,
        sleep: Callable[[float], None] = time.sleep,
        workspace_root: Optional[Path] = None,
    ) -> None:
        self.config = config
        self._requirements = requirements
        self._detect_platform = detect_platform
        self._fetch = fetch
        self._sleep = sleep
        self._workspace_root = workspace_root
        self.stage: Optional[Stage] = None
        # Set while the workspace exists; kept afterwards so callers can check removal
        self.workspace: Optional[Path] = None

    def _enter(self, stage: Stage) -> None:
        self.stage = stage
        LOGGER.debug(f"Stage: {stage.value}")

    def run(self) -> InstallResult:
        """Run the whole pipeline.

        Returns:
            InstallResult describing the installed binary.

        Raises:
            InstallError: From the first failing stage.
        """
        try:
            return self._run()
        except InstallError as e:
            if e.stage is None:
                e.stage = self.stage
            raise

    def _run(self) -> InstallResult:
        config = self.config

        self._enter(Stage.CHECK_DEPS)
        check_requirements(self._requirements)

        self._enter(Stage.DETECT_PLATFORM)
        platform_info = self._detect_platform()
        LOGGER.info(f"Platform        : {platform_info.tag}")

        self._enter(Stage.RESOLVE_VERSION)
        version = resolve_version(
            config.pinned_version, config.repo, config.api_base_url, self._fetch
        )

        assets = ReleaseAssets(
            binary_name=config.binary_name,
            version=version,
            platform=platform_info.tag,
            repo=config.repo,
            base_url=config.download_base_url,
        )

        with tempfile.TemporaryDirectory(
            prefix=WORKSPACE_PREFIX, dir=self._workspace_root
        ) as tmp:
            self.workspace = Path(tmp)
            installed = self._install_from_release(assets, self.workspace)

        self._enter(Stage.DONE)
        LOGGER.info(f"Successfully installed {config.binary_name} {version}")
        return InstallResult(binary_path=installed, version=version, platform=platform_info.tag)

    def _install_from_release(self, assets: ReleaseAssets, workspace: Path) -> Path:
        archive = workspace / assets.archive_name
        manifest = workspace / assets.checksums_name

        self._enter(Stage.DOWNLOAD)
        LOGGER.info(f"Pulling KubeV Downloader : {assets.archive_name}")
        download_file(assets.archive_url, archive, label="asset", sleep=self._sleep)
        LOGGER.info(f"Pulling checksum manifest: {assets.checksums_name}")
        download_file(
            assets.checksums_url, manifest, label="checksum manifest", sleep=self._sleep
        )

        self._enter(Stage.VERIFY)
        LOGGER.info("Verifying SHA-256 integrity ...")
        verify_archive(archive, manifest)
        LOGGER.info("Integrity check passed")

        self._enter(Stage.EXTRACT)
        LOGGER.info("Extracting binary ...")
        extract_dir = workspace / "extract"
        extract_dir.mkdir()
        extract_zip(archive, extract_dir)
        binary = locate_binary(extract_dir, assets.binary_name)
        make_executable(binary)

        self._enter(Stage.INSTALL)
        LOGGER.info(f"Installing to {self.config.install_path} ...")
        return install_binary(binary, self.config.install_dir)
