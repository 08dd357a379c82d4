"""Secure download utilities for release assets.

Downloads use an SSL context built from certifi's CA bundle so standalone
interpreters without access to the system certificate store still verify
the release host. Each asset is retried a bounded number of times on
transient failures.
"""

from __future__ import annotations

import http.client
import json
import shutil
import ssl
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

import certifi

from kubev_installer import __version__
from kubev_installer.config import DOWNLOAD_BASE_URL
from kubev_installer.core.errors import DownloadError
from kubev_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

USER_AGENT = f"kubev-installer/{__version__}"

# Attempts per asset, including the first one
MAX_ATTEMPTS = 3

# Fixed pause between attempts, in seconds
RETRY_DELAY = 1.0

# HTTP statuses worth another attempt; everything else fails immediately
RETRYABLE_STATUS = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class ReleaseAssets:
    """Names and URLs of the files published for one release and platform.

    Attributes:
        binary_name: Executable name, also the archive name prefix.
        version: Release tag.
        platform: Platform tag, e.g. "linux-amd64".
        repo: GitHub ``owner/name``.
        base_url: Host serving release downloads.
    """

    binary_name: str
    version: str
    platform: str
    repo: str
    base_url: str = DOWNLOAD_BASE_URL

    @property
    def archive_name(self) -> str:
        return f"{self.binary_name}-{self.version}-{self.platform}.zip"

    @property
    def checksums_name(self) -> str:
        return f"{self.binary_name}-{self.version}-checksums.txt"

    @property
    def release_url(self) -> str:
        """Download prefix shared by every asset of this release."""
        return f"{self.base_url}/{self.repo}/releases/download/{self.version}"

    @property
    def archive_url(self) -> str:
        return f"{self.release_url}/{self.archive_name}"

    @property
    def checksums_url(self) -> str:
        return f"{self.release_url}/{self.checksums_name}"


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle.

    Returns:
        An SSL context configured with certifi's CA certificates.
    """
    return ssl.create_default_context(cafile=certifi.where())


def secure_urlopen(
    url: str,
    timeout: Optional[float] = 30.0,
    headers: Optional[Dict[str, str]] = None,
):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        timeout: Connection timeout in seconds.
        headers: Extra request headers.

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS.
    """
    if not url.startswith("https://"):
        raise ValueError(f"Only HTTPS URLs are supported: {url}")

    request = Request(url, headers={"User-Agent": USER_AGENT, **(headers or {})})
    return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310


def fetch_json(url: str, timeout: Optional[float] = 30.0) -> Any:
    """Fetch and decode a JSON document.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS or the body is not valid JSON.
    """
    with secure_urlopen(
        url, timeout=timeout, headers={"Accept": "application/vnd.github+json"}
    ) as response:
        return json.loads(response.read().decode("utf-8"))


def is_retryable(error: Exception) -> bool:
    """Return True if a failed request may succeed when repeated."""
    if isinstance(error, HTTPError):
        return error.code in RETRYABLE_STATUS
    return isinstance(
        error, (URLError, TimeoutError, ConnectionError, http.client.HTTPException)
    )


def download_file(
    url: str,
    dest_path: Path,
    *,
    label: str = "asset",
    attempts: int = MAX_ATTEMPTS,
    timeout: Optional[float] = 60.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Download a file with bounded retries.

    Args:
        url: The URL to download from.
        dest_path: Path to save the downloaded file.
        label: Human-readable asset kind used in the failure message.
        attempts: Maximum number of attempts.
        timeout: Connection timeout in seconds.
        sleep: Pause function between attempts.

    Raises:
        DownloadError: If every attempt fails, or the failure is permanent.
    """
    for attempt in range(1, attempts + 1):
        try:
            with secure_urlopen(url, timeout=timeout) as response:
                with open(dest_path, "wb") as f:
                    shutil.copyfileobj(response, f)
            return
        except (OSError, ValueError, http.client.HTTPException) as e:
            if attempt < attempts and is_retryable(e):
                LOGGER.debug(f"Attempt {attempt}/{attempts} for {url} failed: {e}")
                sleep(RETRY_DELAY)
                continue
            raise DownloadError(f"Failed to pull {label}", url) from e
