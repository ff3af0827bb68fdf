"""Installer error taxonomy.

Every failure the pipeline can hit is one of the ``ErrorKind`` values.
Stages raise the matching ``InstallerError`` subclass and let it propagate;
``run_install()`` is the only place that turns one into a diagnostic and an
exit status.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable identifiers for every fatal installer failure."""

    UNSUPPORTED_PLATFORM = "unsupported_platform"
    UNSUPPORTED_ARCHITECTURE = "unsupported_architecture"
    UNSUPPORTED_COMBINATION = "unsupported_combination"
    VERSION_RESOLUTION_FAILED = "version_resolution_failed"
    DOWNLOAD_FAILED = "download_failed"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    TOOL_MISSING = "tool_missing"
    EXTRACT_FAILED = "extract_failed"
    BINARY_NOT_FOUND = "binary_not_found"
    INSTALL_FAILED = "install_failed"


class InstallerError(RuntimeError):
    """Base class for installer failures.

    Parameters
    ----------
    message:
        One-line, human-readable diagnostic.
    hint:
        Optional follow-up advice shown under the diagnostic.
    """

    kind: ErrorKind

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class UnsupportedPlatform(InstallerError):
    kind = ErrorKind.UNSUPPORTED_PLATFORM


class UnsupportedArchitecture(InstallerError):
    kind = ErrorKind.UNSUPPORTED_ARCHITECTURE


class UnsupportedCombination(InstallerError):
    kind = ErrorKind.UNSUPPORTED_COMBINATION


class VersionResolutionFailed(InstallerError):
    kind = ErrorKind.VERSION_RESOLUTION_FAILED


class DownloadFailed(InstallerError):
    """Raised when a GET does not complete with a 2xx response.

    ``status`` is the HTTP status code, or ``None`` when the request never
    produced a response (DNS, TLS, connection reset, timeout).
    """

    kind = ErrorKind.DOWNLOAD_FAILED

    def __init__(
        self,
        url: str,
        status: int | None,
        *,
        reason: str = "",
        hint: str | None = None,
    ) -> None:
        self.url = url
        self.status = status
        if status is None:
            detail = reason or "transport error"
        else:
            detail = f"HTTP {status}: {reason}" if reason else f"HTTP {status}"
        super().__init__(f"Download failed ({detail}): {url}", hint=hint)

    @property
    def not_found(self) -> bool:
        """True when the server answered 404."""
        return self.status == 404


class ChecksumMismatch(InstallerError):
    kind = ErrorKind.CHECKSUM_MISMATCH

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Checksum verification failed! "
            f"Expected: {expected or '<empty>'} Actual: {actual}"
        )


class ToolMissing(InstallerError):
    kind = ErrorKind.TOOL_MISSING


class ExtractFailed(InstallerError):
    kind = ErrorKind.EXTRACT_FAILED


class BinaryNotFound(InstallerError):
    kind = ErrorKind.BINARY_NOT_FOUND


class InstallFailed(InstallerError):
    kind = ErrorKind.INSTALL_FAILED


__all__ = [
    "BinaryNotFound",
    "ChecksumMismatch",
    "DownloadFailed",
    "ErrorKind",
    "ExtractFailed",
    "InstallFailed",
    "InstallerError",
    "ToolMissing",
    "UnsupportedArchitecture",
    "UnsupportedCombination",
    "UnsupportedPlatform",
    "VersionResolutionFailed",
]
