"""Target platform models: architecture, OS family and the target triple."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Architecture(str, Enum):
    """CPU architectures that have prebuilt release artifacts."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"


class OsFamily(str, Enum):
    """OS families, valued by their target-triple suffix."""

    LINUX_GNU = "unknown-linux-gnu"
    MACOS = "apple-darwin"
    WINDOWS_MSVC = "pc-windows-msvc"


class HostInfo(BaseModel):
    """Raw OS name and machine string as reported by the host."""

    model_config = ConfigDict(frozen=True)

    os_name: str
    machine: str


class TargetTriple(BaseModel):
    """Architecture + OS family identifying which artifact to fetch.

    ``str(triple)`` renders the canonical form, e.g.
    ``x86_64-unknown-linux-gnu``.
    """

    model_config = ConfigDict(frozen=True)

    arch: Architecture
    os_family: OsFamily

    @property
    def is_windows(self) -> bool:
        return self.os_family is OsFamily.WINDOWS_MSVC

    @property
    def archive_ext(self) -> str:
        """Archive extension published for this target (no leading dot)."""
        return "zip" if self.is_windows else "tar.gz"

    def executable_name(self, binary_name: str) -> str:
        return f"{binary_name}.exe" if self.is_windows else binary_name

    def __str__(self) -> str:
        return f"{self.arch.value}-{self.os_family.value}"
