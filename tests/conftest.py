"""Shared fixtures for kubev-installer tests."""

from __future__ import annotations

import hashlib
import io
import zipfile
from pathlib import Path
from typing import Callable, Dict

import pytest

BINARY_NAME = "kubev-downloader"
BINARY_CONTENT = b"#!/bin/sh\necho kubev-downloader\n"


def _build_zip(members: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def build_zip() -> Callable[[Dict[str, bytes]], bytes]:
    """Return a helper producing zip archive bytes from a name → data mapping."""
    return _build_zip


@pytest.fixture
def sha256_hex() -> Callable[[bytes], str]:
    return lambda data: hashlib.sha256(data).hexdigest()


@pytest.fixture
def release_zip() -> bytes:
    """A release archive containing only the binary."""
    return _build_zip({BINARY_NAME: BINARY_CONTENT})


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Write bytes to a file under tmp_path and return its path."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
