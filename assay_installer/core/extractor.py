"""Archive extraction for ``.zip`` and gzip-compressed tar release archives."""

from __future__ import annotations

import logging
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

from assay_installer.errors import ExtractFailed, ToolMissing

logger = logging.getLogger(__name__)


def _extract_zip(archive: Path, dest: Path) -> None:
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(dest)


def _extract_tar_gz(archive: Path, dest: Path) -> None:
    with tarfile.open(archive, mode="r:gz") as tf:
        # "data" rejects absolute paths, links escaping dest and device files.
        tf.extractall(dest, filter="data")


# Suffix -> extractor. Longest suffixes first so ".tar.gz" wins over ".gz".
_EXTRACTORS: tuple[tuple[str, Callable[[Path, Path], None]], ...] = (
    (".tar.gz", _extract_tar_gz),
    (".tgz", _extract_tar_gz),
    (".zip", _extract_zip),
)


def extractor_for(archive: Path) -> Callable[[Path, Path], None]:
    """Pick the extractor for *archive* by file name.

    Raises ``ToolMissing`` when no extractor handles the format.
    """
    name = archive.name.lower()
    for suffix, func in _EXTRACTORS:
        if name.endswith(suffix):
            return func
    raise ToolMissing(f"No extractor available for {archive.name}")


def extract_archive(archive: Path, dest: Path) -> Path:
    """Unpack *archive* into *dest* and return *dest*.

    Raises
    ------
    ToolMissing
        The format is unknown, or this interpreter lacks the compression
        codec (e.g. built without zlib).
    ExtractFailed
        The archive is corrupt or cannot be written out.
    """
    archive = Path(archive)
    dest = Path(dest)
    extract = extractor_for(archive)
    dest.mkdir(parents=True, exist_ok=True)
    try:
        extract(archive, dest)
    except tarfile.CompressionError as exc:
        raise ToolMissing(f"gzip support is not available: {exc}") from exc
    except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as exc:
        raise ExtractFailed(f"Failed to extract {archive.name}: {exc}") from exc
    logger.info("Extracted %s into %s", archive.name, dest)
    return dest
