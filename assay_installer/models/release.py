"""Release version models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VersionSource(str, Enum):
    """Where a release tag came from."""

    EXPLICIT = "explicit"
    LATEST = "latest"


class ReleaseVersion(BaseModel):
    """A resolved release tag, e.g. ``v1.3.0``."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    source: VersionSource = VersionSource.EXPLICIT

    def __str__(self) -> str:
        return self.tag


class ReleaseMetadata(BaseModel):
    """The part of the GitHub "latest release" response we rely on.

    Every other field in the payload is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    tag_name: str = Field(min_length=1)
