"""Release artifact, verification and installation result models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from assay_installer.models.platform import TargetTriple
from assay_installer.models.release import ReleaseVersion


class ArtifactReference(BaseModel):
    """Where a release archive and its checksum live.

    Derived purely from repo identity, version and target triple.
    """

    model_config = ConfigDict(frozen=True)

    archive_name: str
    download_url: str
    checksum_url: str


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    SKIPPED = "skipped"


class VerificationResult(BaseModel):
    """Outcome of checksum verification that did not abort the run."""

    model_config = ConfigDict(frozen=True)

    status: VerificationStatus
    expected: str | None = None
    actual: str | None = None

    @property
    def verified(self) -> bool:
        return self.status is VerificationStatus.VERIFIED


class InstalledBinary(BaseModel):
    """The binary written into the install directory."""

    model_config = ConfigDict(frozen=True)

    path: Path
    executable: bool
    version: ReleaseVersion
    triple: TargetTriple


class InstallOutcome(BaseModel):
    """Everything a successful run produced."""

    model_config = ConfigDict(frozen=True)

    installed: InstalledBinary
    artifact: ArtifactReference
    verification: VerificationResult
    path_configured: bool
