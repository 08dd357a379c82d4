"""Tests for platform detection functionality."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from kubev_installer.bootstrap.platform import (
    get_platform_info,
    PlatformInfo,
    detect_os,
    detect_arch,
    normalize_arch,
    normalize_os,
)
from kubev_installer.core.errors import UnsupportedPlatformError
from kubev_installer.core.stages import Stage


class TestDetectOS:
    """Tests for OS detection."""

    def test_detect_os_darwin(self) -> None:
        with patch("platform.system", return_value="Darwin"):
            assert detect_os() == "darwin"

    def test_detect_os_linux(self) -> None:
        with patch("platform.system", return_value="Linux"):
            assert detect_os() == "linux"

    def test_detect_os_windows_is_unsupported(self) -> None:
        with patch("platform.system", return_value="Windows"):
            with pytest.raises(UnsupportedPlatformError, match="Unsupported operating system: Windows"):
                detect_os()

    def test_detect_os_explicit_value(self) -> None:
        assert detect_os("Linux") == "linux"

    def test_detect_os_unknown_raises_with_raw_value(self) -> None:
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            detect_os("FreeBSD")
        assert "FreeBSD" in str(exc_info.value)
        assert exc_info.value.stage == Stage.DETECT_PLATFORM


class TestDetectArch:
    """Tests for architecture detection."""

    def test_detect_arch_x86_64(self) -> None:
        with patch("platform.machine", return_value="x86_64"):
            assert detect_arch() == "amd64"

    def test_detect_arch_arm64(self) -> None:
        with patch("platform.machine", return_value="arm64"):
            assert detect_arch() == "arm64"

    def test_detect_arch_aarch64(self) -> None:
        with patch("platform.machine", return_value="aarch64"):
            assert detect_arch() == "arm64"

    def test_detect_arch_unknown_raises(self) -> None:
        with patch("platform.machine", return_value="mips"):
            with pytest.raises(UnsupportedPlatformError, match="Unsupported architecture: mips"):
                detect_arch()

    def test_detect_arch_has_no_fallback(self) -> None:
        with pytest.raises(UnsupportedPlatformError, match="i686"):
            detect_arch("i686")


class TestNormalize:
    """Tests for OS and architecture normalization."""

    def test_normalize_x86_64(self) -> None:
        assert normalize_arch("x86_64") == "amd64"

    def test_normalize_aarch64(self) -> None:
        assert normalize_arch("aarch64") == "arm64"

    def test_normalize_unknown_arch(self) -> None:
        assert normalize_arch("unknown") is None

    def test_normalize_os_is_exact(self) -> None:
        assert normalize_os("Linux") == "linux"
        assert normalize_os("linux") is None


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_platform_info_tag(self) -> None:
        info = PlatformInfo(os="darwin", arch="arm64")
        assert info.tag == "darwin-arm64"



class TestGetPlatformInfo:
    """Tests for get_platform_info function."""

    @pytest.mark.parametrize(
        "system, machine, expected",
        [
            ("Linux", "x86_64", "linux-amd64"),
            ("Linux", "aarch64", "linux-arm64"),
            ("Linux", "arm64", "linux-arm64"),
            ("Darwin", "x86_64", "darwin-amd64"),
            ("Darwin", "arm64", "darwin-arm64"),
        ],
    )
    def test_documented_mapping(self, system: str, machine: str, expected: str) -> None:
        assert get_platform_info(system, machine).tag == expected

    def test_get_platform_info_uses_host(self) -> None:
        with patch("platform.system", return_value="Linux"):
            with patch("platform.machine", return_value="x86_64"):
                info = get_platform_info()
                assert isinstance(info, PlatformInfo)
                assert info.tag == "linux-amd64"
