"""Release version resolution.

A pinned tag is used verbatim. Otherwise the latest release tag is read from
the GitHub releases API on every run.
"""

from __future__ import annotations

import http.client
from typing import Any, Callable, Optional

from kubev_installer.bootstrap.download import fetch_json
from kubev_installer.config import API_BASE_URL
from kubev_installer.core.errors import VersionResolutionError
from kubev_installer.core.logging import get_logger

LOGGER = get_logger(__name__)


def latest_release_url(repo: str, api_base_url: str = API_BASE_URL) -> str:
    """Return the releases API endpoint for the latest release of ``repo``."""
    return f"{api_base_url}/repos/{repo}/releases/latest"


def extract_tag_name(payload: Any) -> str:
    """Extract ``tag_name`` from a latest-release response.

    Raises:
        VersionResolutionError: If the payload carries no usable tag.
    """
    if not isinstance(payload, dict):
        raise VersionResolutionError("response is not a JSON object")
    tag = payload.get("tag_name")
    if not isinstance(tag, str) or not tag.strip():
        raise VersionResolutionError("response has no tag_name")
    return tag


def fetch_latest_version(
    repo: str,
    api_base_url: str = API_BASE_URL,
    fetch: Callable[[str], Any] = fetch_json,
) -> str:
    """Query the releases API for the most recent release tag.

    Args:
        repo: GitHub ``owner/name``.
        api_base_url: Host serving the releases API.
        fetch: JSON fetcher, replaced in tests.

    Returns:
        The latest release tag.

    Raises:
        VersionResolutionError: On network failure or a malformed response.
    """
    url = latest_release_url(repo, api_base_url)
    LOGGER.debug(f"Querying {url}")
    try:
        payload = fetch(url)
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise VersionResolutionError(str(e)) from e
    return extract_tag_name(payload)


def resolve_version(
    pinned: Optional[str],
    repo: str,
    api_base_url: str = API_BASE_URL,
    fetch: Callable[[str], Any] = fetch_json,
) -> str:
    """Return the release tag to install.

    Args:
        pinned: Explicit release tag, or None/empty to resolve the latest.
        repo: GitHub ``owner/name``.
        api_base_url: Host serving the releases API.
        fetch: JSON fetcher, replaced in tests.

    Returns:
        Release tag, verbatim when pinned.
    """
    if pinned:
        LOGGER.info(f"Pinned version  : {pinned}")
        return pinned

    LOGGER.info("Resolving latest kubermatic virtualization release ...")
    version = fetch_latest_version(repo, api_base_url, fetch)
    LOGGER.info(f"Resolved version: {version}")
    return version
