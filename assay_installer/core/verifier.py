"""Archive checksum verification.

Verification is best-effort: when no checksum file could be fetched the
archive is accepted with a warning. That favours availability over
strictness; a hardened installer would treat a missing checksum as fatal.
A checksum that *is* published and does not match always aborts the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from assay_installer.core.hasher import parse_checksum_text, sha256_file
from assay_installer.errors import ChecksumMismatch
from assay_installer.models.artifacts import VerificationResult, VerificationStatus

logger = logging.getLogger(__name__)


def verify_archive(archive: Path, checksum_text: str | None) -> VerificationResult:
    """Check *archive* against the published checksum text.

    Parameters
    ----------
    archive:
        Path to the downloaded archive.
    checksum_text:
        Contents of the ``.sha256`` file, or ``None`` if it was unavailable.

    Raises
    ------
    ChecksumMismatch
        The published digest differs from the archive's SHA-256. The
        comparison is case-sensitive.
    """
    if checksum_text is None:
        logger.info("No checksum available for %s; skipping verification", archive.name)
        return VerificationResult(status=VerificationStatus.SKIPPED)

    expected = parse_checksum_text(checksum_text)
    actual = sha256_file(archive)
    if expected != actual:
        logger.debug("Checksum mismatch for %s: expected=%s actual=%s", archive.name, expected, actual)
        raise ChecksumMismatch(expected=expected, actual=actual)

    logger.info("Checksum verified for %s (%s)", archive.name, actual)
    return VerificationResult(
        status=VerificationStatus.VERIFIED, expected=expected, actual=actual
    )
