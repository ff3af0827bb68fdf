"""SHA-256 helpers for archive verification."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> str:
    """SHA-256 hex digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with Path(path).open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def parse_checksum_text(text: str) -> str:
    """Extract the digest from a published checksum file.

    The file usually reads ``<hex>  <filename>``; only the leading token
    counts. A ``sha256:`` prefix is tolerated. Returns ``""`` when the file
    holds no token at all.
    """
    tokens = text.split()
    if not tokens:
        return ""
    return tokens[0].removeprefix("sha256:")
