"""Error taxonomy for the install pipeline.

Every failure is fatal for the run. Library code raises one of these and
the CLI turns it into a FATAL log line and a non-zero exit.
"""

from __future__ import annotations

from typing import Optional

from kubev_installer.core.stages import Stage


class InstallError(Exception):
    """Base class for install pipeline failures.

    Attributes:
        stage: Pipeline stage that was running when the error was raised.
    """

    def __init__(self, message: str, *, stage: Optional[Stage] = None) -> None:
        super().__init__(message)
        self.stage = stage


class MissingDependencyError(InstallError):
    """A required runtime dependency is not available."""

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is required but not installed.", stage=Stage.CHECK_DEPS)
        self.name = name


class UnsupportedPlatformError(InstallError):
    """The host operating system or architecture has no release artifact."""

    def __init__(self, message: str) -> None:
        super().__init__(message, stage=Stage.DETECT_PLATFORM)


class VersionResolutionError(InstallError):
    """The latest release tag could not be determined."""

    def __init__(self, detail: Optional[str] = None) -> None:
        message = "Unable to resolve latest release tag. Set KUBEV_VERSION explicitly and retry."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, stage=Stage.RESOLVE_VERSION)


class DownloadError(InstallError):
    """A release asset could not be fetched."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(f"{message} - URL: {url}", stage=Stage.DOWNLOAD)
        self.url = url


class IntegrityError(InstallError):
    """The archive digest does not match the checksum manifest."""

    def __init__(self, detail: Optional[str] = None) -> None:
        message = "Integrity check failed: archive may be corrupted or tampered with"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, stage=Stage.VERIFY)


class BinaryNotFoundError(InstallError):
    """The archive does not contain the expected executable."""

    def __init__(self, binary_name: str) -> None:
        super().__init__(
            f"Expected binary '{binary_name}' not found in archive", stage=Stage.EXTRACT
        )
        self.binary_name = binary_name
