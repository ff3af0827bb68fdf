"""Tests for artifact location — a pure, deterministic URL mapping."""

from __future__ import annotations

import pytest

from assay_installer.core.artifact_locator import archive_name, locate_artifact
from assay_installer.models.platform import Architecture, OsFamily, TargetTriple
from assay_installer.models.release import ReleaseVersion

LINUX = TargetTriple(arch=Architecture.X86_64, os_family=OsFamily.LINUX_GNU)
MACOS = TargetTriple(arch=Architecture.AARCH64, os_family=OsFamily.MACOS)
WINDOWS = TargetTriple(arch=Architecture.X86_64, os_family=OsFamily.WINDOWS_MSVC)


def _locate(repo: str = "assay-dev/assay", version: str = "v1.3.0", triple: TargetTriple = LINUX):
    return locate_artifact(repo, ReleaseVersion(tag=version), triple, binary_name="assay")


class TestLocateArtifact:
    def test_linux_reference(self):
        ref = _locate()
        assert ref.archive_name == "assay-v1.3.0-x86_64-unknown-linux-gnu.tar.gz"
        assert ref.download_url == (
            "https://github.com/assay-dev/assay/releases/download/v1.3.0/"
            "assay-v1.3.0-x86_64-unknown-linux-gnu.tar.gz"
        )
        assert ref.checksum_url == ref.download_url + ".sha256"

    def test_deterministic(self):
        assert _locate() == _locate()

    def test_windows_uses_zip(self):
        ref = _locate(triple=WINDOWS)
        assert ref.archive_name == "assay-v1.3.0-x86_64-pc-windows-msvc.zip"
        assert ref.download_url.endswith(".zip")

    @pytest.mark.parametrize("triple", [LINUX, MACOS])
    def test_non_windows_uses_tar_gz(self, triple: TargetTriple):
        assert _locate(triple=triple).archive_name.endswith(".tar.gz")

    def test_changing_version_changes_only_version_segments(self):
        a = _locate(version="v1.3.0")
        b = _locate(version="v2.0.0")
        assert a.download_url.replace("v1.3.0", "v2.0.0") == b.download_url

    def test_changing_repo_changes_only_repo_segment(self):
        a = _locate(repo="assay-dev/assay")
        b = _locate(repo="fork/assay")
        assert a.archive_name == b.archive_name
        assert a.download_url.replace("assay-dev/assay", "fork/assay") == b.download_url

    def test_changing_triple_changes_only_archive_name(self):
        a = _locate(triple=LINUX)
        b = _locate(triple=MACOS)
        assert a.download_url.rsplit("/", 1)[0] == b.download_url.rsplit("/", 1)[0]
        assert a.archive_name != b.archive_name

    def test_custom_host_base_without_trailing_slash(self):
        ref = locate_artifact(
            "assay-dev/assay",
            "v1.3.0",
            LINUX,
            binary_name="assay",
            release_host_base="https://mirror.example/",
        )
        assert ref.download_url.startswith("https://mirror.example/assay-dev/assay/releases/")

    def test_archive_name_accepts_plain_string_version(self):
        assert archive_name("assay", "v0.9.1", MACOS) == "assay-v0.9.1-aarch64-apple-darwin.tar.gz"
