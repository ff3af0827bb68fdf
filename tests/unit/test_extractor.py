"""Tests for archive extraction."""

from __future__ import annotations

import tarfile
from pathlib import Path

import pytest

from assay_installer.core import extractor
from assay_installer.core.extractor import extract_archive, extractor_for
from assay_installer.errors import ErrorKind, ExtractFailed, ToolMissing


class TestExtractArchive:
    def test_tar_gz(self, make_archive, tmp_path: Path):
        archive = make_archive("a.tar.gz", {"pkg/assay": b"bin", "pkg/README.md": b"doc"})
        root = extract_archive(archive, tmp_path / "out")
        assert (root / "pkg" / "assay").read_bytes() == b"bin"
        assert (root / "pkg" / "README.md").exists()

    def test_tgz_suffix(self, make_archive, tmp_path: Path):
        archive = make_archive("a.tgz", {"assay": b"bin"})
        assert (extract_archive(archive, tmp_path / "out") / "assay").exists()

    def test_zip(self, make_archive, tmp_path: Path):
        archive = make_archive("a.zip", {"pkg/assay.exe": b"MZ"})
        root = extract_archive(archive, tmp_path / "out")
        assert (root / "pkg" / "assay.exe").read_bytes() == b"MZ"

    def test_unknown_format_is_tool_missing(self, tmp_path: Path):
        archive = tmp_path / "a.tar.xz"
        archive.write_bytes(b"whatever")
        with pytest.raises(ToolMissing) as info:
            extract_archive(archive, tmp_path / "out")
        assert info.value.kind is ErrorKind.TOOL_MISSING

    def test_missing_codec_is_tool_missing(self, make_archive, tmp_path: Path, monkeypatch):
        def _no_gzip(archive, dest):
            raise tarfile.CompressionError("gzip module is not available")

        monkeypatch.setattr(
            extractor, "_EXTRACTORS", ((".tar.gz", _no_gzip),) + extractor._EXTRACTORS[1:]
        )
        archive = make_archive("a.tar.gz", {"assay": b"bin"})
        with pytest.raises(ToolMissing, match="gzip"):
            extract_archive(archive, tmp_path / "out")

    def test_corrupt_tar_gz(self, tmp_path: Path):
        archive = tmp_path / "a.tar.gz"
        archive.write_bytes(b"this is not gzip data")
        with pytest.raises(ExtractFailed) as info:
            extract_archive(archive, tmp_path / "out")
        assert info.value.kind is ErrorKind.EXTRACT_FAILED

    def test_corrupt_zip(self, tmp_path: Path):
        archive = tmp_path / "a.zip"
        archive.write_bytes(b"PK but not really")
        with pytest.raises(ExtractFailed):
            extract_archive(archive, tmp_path / "out")

    def test_rejects_path_traversal(self, make_archive, tmp_path: Path):
        archive = make_archive("evil.tar.gz", {"../escaped": b"x"})
        with pytest.raises(ExtractFailed):
            extract_archive(archive, tmp_path / "out")
        assert not (tmp_path / "escaped").exists()


class TestExtractorFor:
    def test_suffix_is_case_insensitive(self, tmp_path: Path):
        assert extractor_for(tmp_path / "A.ZIP") is extractor._extract_zip
