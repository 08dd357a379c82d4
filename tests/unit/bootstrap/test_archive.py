"""Tests for archive extraction and binary installation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from kubev_installer.bootstrap.archive import (
    extract_zip,
    install_binary,
    locate_binary,
    make_executable,
)
from kubev_installer.core.errors import BinaryNotFoundError, InstallError
from kubev_installer.core.stages import Stage


class TestExtractZip:
    """Tests for safe zip extraction."""

    def test_extracts_members(self, tmp_path: Path, build_zip, write_file) -> None:
        archive = write_file("a.zip", build_zip({"kubev-downloader": b"bin", "LICENSE": b"text"}))
        dest = tmp_path / "out"
        dest.mkdir()
        extract_zip(archive, dest)
        assert (dest / "kubev-downloader").read_bytes() == b"bin"
        assert (dest / "LICENSE").read_bytes() == b"text"

    def test_rejects_parent_traversal(self, tmp_path: Path, build_zip, write_file) -> None:
        archive = write_file("a.zip", build_zip({"../evil": b"x"}))
        dest = tmp_path / "out"
        dest.mkdir()
        with pytest.raises(InstallError, match="Unsafe path in archive: ../evil"):
            extract_zip(archive, dest)
        assert not (tmp_path / "evil").exists()

    def test_rejects_absolute_path(self, tmp_path: Path, build_zip, write_file) -> None:
        archive = write_file("a.zip", build_zip({"/etc/evil": b"x"}))
        dest = tmp_path / "out"
        dest.mkdir()
        with pytest.raises(InstallError, match="Unsafe path"):
            extract_zip(archive, dest)

    def test_corrupt_archive(self, tmp_path: Path, write_file) -> None:
        archive = write_file("a.zip", b"not a zip")
        with pytest.raises(InstallError, match="Failed to extract archive") as exc_info:
            extract_zip(archive, tmp_path)
        assert exc_info.value.stage == Stage.EXTRACT


class TestLocateBinary:
    """Tests for locating the binary in the extracted tree."""

    def test_found(self, tmp_path: Path) -> None:
        (tmp_path / "kubev-downloader").write_bytes(b"bin")
        assert locate_binary(tmp_path, "kubev-downloader") == tmp_path / "kubev-downloader"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(BinaryNotFoundError, match="Expected binary 'kubev-downloader' not found in archive"):
            locate_binary(tmp_path, "kubev-downloader")

    def test_directory_is_not_a_binary(self, tmp_path: Path) -> None:
        (tmp_path / "kubev-downloader").mkdir()
        with pytest.raises(BinaryNotFoundError):
            locate_binary(tmp_path, "kubev-downloader")

    def test_nested_binary_is_not_found(self, tmp_path: Path) -> None:
        (tmp_path / "dist").mkdir()
        (tmp_path / "dist" / "kubev-downloader").write_bytes(b"bin")
        with pytest.raises(BinaryNotFoundError):
            locate_binary(tmp_path, "kubev-downloader")


class TestInstall:
    """Tests for permission setting and the final move."""

    def test_make_executable(self, tmp_path: Path) -> None:
        path = tmp_path / "tool"
        path.write_bytes(b"bin")
        path.chmod(0o644)
        make_executable(path)
        assert os.access(path, os.X_OK)
        assert path.stat().st_mode & 0o777 == 0o755

    def test_install_moves_binary(self, tmp_path: Path) -> None:
        source = tmp_path / "work" / "kubev-downloader"
        source.parent.mkdir()
        source.write_bytes(b"bin")
        target_dir = tmp_path / "bin"
        target_dir.mkdir()

        installed = install_binary(source, target_dir)

        assert installed == target_dir / "kubev-downloader"
        assert installed.read_bytes() == b"bin"
        assert not source.exists()

    def test_install_replaces_existing(self, tmp_path: Path) -> None:
        source = tmp_path / "work" / "kubev-downloader"
        source.parent.mkdir()
        source.write_bytes(b"new")
        target_dir = tmp_path / "bin"
        target_dir.mkdir()
        (target_dir / "kubev-downloader").write_bytes(b"old")

        install_binary(source, target_dir)

        assert (target_dir / "kubev-downloader").read_bytes() == b"new"

    def test_missing_install_dir(self, tmp_path: Path) -> None:
        source = tmp_path / "kubev-downloader"
        source.write_bytes(b"bin")
        with pytest.raises(InstallError, match="Install directory does not exist") as exc_info:
            install_binary(source, tmp_path / "nope")
        assert exc_info.value.stage == Stage.INSTALL
