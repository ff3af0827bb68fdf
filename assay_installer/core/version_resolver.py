"""Release version resolution: explicit tag, or "latest" from the GitHub API."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from assay_installer.config import LATEST
from assay_installer.core.fetcher import Fetcher
from assay_installer.errors import DownloadFailed, VersionResolutionFailed
from assay_installer.models.release import ReleaseMetadata, ReleaseVersion, VersionSource

logger = logging.getLogger(__name__)

_MANUAL_HINT = "Please specify ASSAY_VERSION manually."


def latest_release_url(api_base: str, repo: str) -> str:
    return f"{api_base.rstrip('/')}/repos/{repo}/releases/latest"


def api_headers(token: str = "") -> dict[str, str]:
    """Headers for the GitHub REST API, authenticated when *token* is set."""
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def fetch_latest_release(
    fetcher: Fetcher,
    *,
    api_base: str,
    repo: str,
    token: str = "",
) -> ReleaseMetadata:
    """Query the latest release and parse the response into ``ReleaseMetadata``."""
    url = latest_release_url(api_base, repo)
    try:
        payload = fetcher.get_json(url, headers=api_headers(token))
    except DownloadFailed as exc:
        raise VersionResolutionFailed(
            f"Failed to determine latest version ({exc})", hint=_MANUAL_HINT
        ) from exc

    if not isinstance(payload, dict):
        raise VersionResolutionFailed(
            "Failed to determine latest version (unexpected release metadata)",
            hint=_MANUAL_HINT,
        )
    try:
        return ReleaseMetadata.model_validate(payload)
    except ValidationError as exc:
        raise VersionResolutionFailed(
            "Failed to determine latest version (no tag_name in release metadata)",
            hint=_MANUAL_HINT,
        ) from exc


def resolve_version(
    requested: str,
    *,
    fetcher: Fetcher,
    api_base: str,
    repo: str,
    token: str = "",
) -> ReleaseVersion:
    """Return the release to install.

    An explicit tag is used verbatim without touching the network; whether
    it exists is discovered by the download. ``"latest"`` (or an empty
    value) is resolved through the release API.
    """
    requested = requested.strip()
    if requested and requested != LATEST:
        return ReleaseVersion(tag=requested, source=VersionSource.EXPLICIT)

    metadata = fetch_latest_release(fetcher, api_base=api_base, repo=repo, token=token)
    tag = metadata.tag_name.strip()
    if not tag:
        raise VersionResolutionFailed(
            "Failed to determine latest version (empty tag_name)", hint=_MANUAL_HINT
        )
    logger.info("Latest release of %s is %s", repo, tag)
    return ReleaseVersion(tag=tag, source=VersionSource.LATEST)
