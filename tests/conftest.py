"""Shared test fixtures for the Assay installer."""

from __future__ import annotations

import io
import json
import os
import tarfile
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from assay_installer.config import InstallerSettings
from assay_installer.models.platform import HostInfo
from assay_installer.reporter import Reporter


# ---------------------------------------------------------------------------
# Fake HTTP layer
# ---------------------------------------------------------------------------


class FakeResponse:
    """Just enough of ``requests.Response`` for the fetcher."""

    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self.content = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def json(self) -> Any:
        return json.loads(self.content.decode("utf-8"))

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Serves canned responses by URL; unknown URLs answer 404."""

    def __init__(self) -> None:
        self._routes: dict[str, FakeResponse | BaseException] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, url: str, body: bytes | str | dict = b"", status: int = 200) -> None:
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._routes[url] = FakeResponse(status, body)

    def fail(self, url: str, exc: BaseException) -> None:
        self._routes[url] = exc

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        route = self._routes.get(url)
        if isinstance(route, BaseException):
            raise route
        if route is None:
            return FakeResponse(404, b"Not Found")
        return FakeResponse(route.status_code, route.content)

    @property
    def urls(self) -> list[str]:
        return [call["url"] for call in self.calls]


@pytest.fixture
def fake_session() -> FakeSession:
    """Provide an empty fake HTTP session."""
    return FakeSession()


# ---------------------------------------------------------------------------
# Archives
# ---------------------------------------------------------------------------


def _write_tar_gz(path: Path, members: dict[str, bytes]) -> Path:
    with tarfile.open(path, "w:gz") as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(data))
    return path


def _write_zip(path: Path, members: dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write a ``.tar.gz`` or ``.zip`` with the given members."""

    def _factory(name: str, members: dict[str, bytes]) -> Path:
        out_dir = tmp_path / "archives"
        out_dir.mkdir(exist_ok=True)
        path = out_dir / name
        if name.endswith(".zip"):
            return _write_zip(path, members)
        return _write_tar_gz(path, members)

    return _factory


# ---------------------------------------------------------------------------
# Settings, host and reporter
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_assay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's ASSAY_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("ASSAY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    return tmp_path / "bin"


@pytest.fixture
def workspace_parent(tmp_path: Path) -> Path:
    return tmp_path / "workspaces"


@pytest.fixture
def make_settings(install_dir: Path) -> Callable[..., InstallerSettings]:
    """Factory fixture: build ``InstallerSettings`` with test defaults."""

    def _factory(**overrides: Any) -> InstallerSettings:
        defaults: dict[str, Any] = {
            "version": "v1.3.0",
            "install_dir": install_dir,
        }
        defaults.update(overrides)
        return InstallerSettings(**defaults)

    return _factory


@pytest.fixture
def linux_host() -> HostInfo:
    return HostInfo(os_name="Linux", machine="x86_64")


class CapturedReporter(Reporter):
    """Reporter writing plain text into buffers."""

    def __init__(self) -> None:
        self._out = io.StringIO()
        self._err = io.StringIO()
        super().__init__(
            console=Console(file=self._out, width=200, color_system=None),
            err_console=Console(file=self._err, width=200, color_system=None),
        )

    @property
    def output(self) -> str:
        return self._out.getvalue()

    @property
    def errors(self) -> str:
        return self._err.getvalue()


@pytest.fixture
def reporter() -> CapturedReporter:
    """Provide a reporter whose output can be inspected."""
    return CapturedReporter()
