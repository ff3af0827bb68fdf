"""Artifact location: a pure mapping to release download URLs."""

from __future__ import annotations

from assay_installer.models.artifacts import ArtifactReference
from assay_installer.models.platform import TargetTriple
from assay_installer.models.release import ReleaseVersion

CHECKSUM_SUFFIX = ".sha256"


def archive_name(binary_name: str, version: ReleaseVersion | str, triple: TargetTriple) -> str:
    """``{binary}-{version}-{triple}.{ext}``, e.g. ``assay-v1.3.0-x86_64-unknown-linux-gnu.tar.gz``."""
    return f"{binary_name}-{version}-{triple}.{triple.archive_ext}"


def locate_artifact(
    repo: str,
    version: ReleaseVersion | str,
    triple: TargetTriple,
    *,
    binary_name: str,
    release_host_base: str = "https://github.com",
) -> ArtifactReference:
    """Build the archive name, download URL and checksum URL.

    No I/O: identical inputs always produce identical references.
    """
    name = archive_name(binary_name, version, triple)
    base = release_host_base.rstrip("/")
    download_url = f"{base}/{repo}/releases/download/{version}/{name}"
    return ArtifactReference(
        archive_name=name,
        download_url=download_url,
        checksum_url=f"{download_url}{CHECKSUM_SUFFIX}",
    )
