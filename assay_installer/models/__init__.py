"""Installer data models, all pydantic v2 and frozen."""

from assay_installer.models.artifacts import (
    ArtifactReference,
    InstalledBinary,
    InstallOutcome,
    VerificationResult,
    VerificationStatus,
)
from assay_installer.models.platform import (
    Architecture,
    HostInfo,
    OsFamily,
    TargetTriple,
)
from assay_installer.models.release import (
    ReleaseMetadata,
    ReleaseVersion,
    VersionSource,
)

__all__ = [
    # platform
    "Architecture",
    "HostInfo",
    "OsFamily",
    "TargetTriple",
    # release
    "ReleaseMetadata",
    "ReleaseVersion",
    "VersionSource",
    # artifacts
    "ArtifactReference",
    "InstalledBinary",
    "InstallOutcome",
    "VerificationResult",
    "VerificationStatus",
]
