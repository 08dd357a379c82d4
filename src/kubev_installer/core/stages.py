"""Install pipeline stages."""

from __future__ import annotations

from enum import Enum


class Stage(str, Enum):
    """Linear pipeline stages, in execution order."""

    CHECK_DEPS = "check_deps"
    DETECT_PLATFORM = "detect_platform"
    RESOLVE_VERSION = "resolve_version"
    DOWNLOAD = "download"
    VERIFY = "verify"
    EXTRACT = "extract"
    INSTALL = "install"
    DONE = "done"
