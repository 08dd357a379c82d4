"""Checksum manifest parsing and archive verification."""

from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import List, Tuple

from kubev_installer.core.errors import IntegrityError
from kubev_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

_CHUNK_SIZE = 64 * 1024

# sha256sum output: "<digest>  <name>" (text mode) or "<digest> *<name>" (binary mode)
_MANIFEST_LINE = re.compile(r"^(?P<digest>\S+)\s+\*?(?P<name>.+?)\s*$")
_SHA256_HEX = re.compile(r"^[0-9a-fA-F]{64}$")


def parse_manifest(text: str) -> List[Tuple[str, str]]:
    """Parse a checksum manifest into ``(name, digest)`` pairs.

    Blank lines and lines that do not look like ``<digest> <name>`` are skipped.
    """
    entries = []
    for line in text.splitlines():
        match = _MANIFEST_LINE.match(line.strip())
        if match:
            entries.append((match.group("name"), match.group("digest")))
    return entries


def sha256_file(path: Path) -> str:
    """Return the hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_archive(archive_path: Path, manifest_path: Path) -> None:
    """Check the archive against its entry in the checksum manifest.

    Every manifest line naming the archive must carry the archive's digest.

    Args:
        archive_path: Downloaded archive.
        manifest_path: Downloaded checksum manifest.

    Raises:
        IntegrityError: If the entry is missing, malformed or does not match.
    """
    archive_name = archive_path.name
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IntegrityError(f"unreadable checksum manifest: {e}") from e

    expected = [digest for name, digest in parse_manifest(text) if name == archive_name]
    if not expected:
        raise IntegrityError(f"no checksum entry for {archive_name}")

    actual = sha256_file(archive_path)
    for digest in expected:
        if not _SHA256_HEX.match(digest):
            raise IntegrityError(f"malformed checksum entry for {archive_name}")
        if digest.lower() != actual:
            LOGGER.debug(f"Expected {digest.lower()}, got {actual}")
            raise IntegrityError(f"checksum mismatch for {archive_name}")
