"""Runtime dependency checks for the install pipeline.

Before touching the network or the filesystem the installer verifies that
the pieces it relies on are usable:

- certifi CA bundle: trust store for HTTPS downloads
- zlib: deflate support for zip extraction
- sha256: digest algorithm for the checksum manifest

The certifi package itself is an install dependency and is imported when
the package loads; only its CA bundle file is checked here, since frozen or
stripped environments can ship the module without the bundle.
"""

from __future__ import annotations

import hashlib
import importlib
import os
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import certifi

from kubev_installer.core.errors import MissingDependencyError
from kubev_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Requirement:
    """A named runtime dependency and the probe that detects it.

    Attributes:
        name: Name reported when the dependency is missing.
        probe: Returns True when the dependency is usable.
    """

    name: str
    probe: Callable[[], bool]

    def is_available(self) -> bool:
        try:
            return bool(self.probe())
        except (ImportError, OSError):
            return False


def _module_available(module: str) -> bool:
    importlib.import_module(module)
    return True


def _ca_bundle_available() -> bool:
    return os.path.isfile(certifi.where())


def _sha256_available() -> bool:
    return "sha256" in hashlib.algorithms_available


DEFAULT_REQUIREMENTS = (
    Requirement("certifi CA bundle", _ca_bundle_available),
    Requirement("zlib", lambda: _module_available("zlib")),
    Requirement("sha256", _sha256_available),
)


def check_requirements(
    requirements: Optional[Iterable[Requirement]] = None,
) -> None:
    """Verify every requirement, failing on the first missing one.

    Args:
        requirements: Requirements to check (defaults to DEFAULT_REQUIREMENTS).

    Raises:
        MissingDependencyError: Naming the first unavailable requirement.
    """
    for req in DEFAULT_REQUIREMENTS if requirements is None else requirements:
        if not req.is_available():
            raise MissingDependencyError(req.name)
        LOGGER.debug(f"Requirement '{req.name}' available")
