"""Archive extraction and binary installation."""

from __future__ import annotations

import shutil
import zipfile
from pathlib import Path

from kubev_installer.core.errors import BinaryNotFoundError, InstallError
from kubev_installer.core.stages import Stage


def extract_zip(archive_path: Path, dest_dir: Path) -> None:
    """Extract a zip archive, refusing members that escape ``dest_dir``.

    Raises:
        InstallError: If the archive is unreadable or contains unsafe paths.
    """
    root = dest_dir.resolve()
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            for name in zf.namelist():
                # Security: check for path traversal
                member_path = (root / name).resolve()
                if name.startswith("/") or not member_path.is_relative_to(root):
                    raise InstallError(f"Unsafe path in archive: {name}", stage=Stage.EXTRACT)
            zf.extractall(path=root)
    except (zipfile.BadZipFile, OSError) as e:
        raise InstallError(f"Failed to extract archive: {e}", stage=Stage.EXTRACT) from e


def locate_binary(extract_dir: Path, binary_name: str) -> Path:
    """Return the expected binary at the root of the extracted archive.

    Raises:
        BinaryNotFoundError: If no regular file with that name exists.
    """
    binary = extract_dir / binary_name
    if not binary.is_file():
        raise BinaryNotFoundError(binary_name)
    return binary


def make_executable(path: Path) -> None:
    """Add the executable bits to a file."""
    path.chmod(path.stat().st_mode | 0o111)


def install_binary(binary: Path, install_dir: Path) -> Path:
    """Move an extracted binary into the installation directory.

    The move is not atomic; an interrupted move may leave a partial file.

    Args:
        binary: Extracted, executable binary inside the workspace.
        install_dir: Target directory; must already exist.

    Returns:
        Path of the installed binary.

    Raises:
        InstallError: If the directory is missing or the move fails.
    """
    if not install_dir.is_dir():
        raise InstallError(
            f"Install directory does not exist: {install_dir}", stage=Stage.INSTALL
        )
    target = install_dir / binary.name
    try:
        shutil.move(str(binary), str(target))
    except OSError as e:
        raise InstallError(f"Failed to install {target}: {e}", stage=Stage.INSTALL) from e
    return target
