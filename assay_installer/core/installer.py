"""Binary location inside an extracted archive, and installation."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from assay_installer.errors import BinaryNotFound, InstallFailed
from assay_installer.models.artifacts import InstalledBinary
from assay_installer.models.platform import TargetTriple
from assay_installer.models.release import ReleaseVersion

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def locate_binary(
    root: Path,
    *,
    binary_name: str,
    version: ReleaseVersion | str,
    triple: TargetTriple,
) -> Path:
    """Find the executable inside an extracted archive.

    Search order:

    1. ``{root}/{binary}-{version}-{triple}/{exe}`` (the published layout)
    2. ``{root}/{exe}``
    3. anywhere below *root*, shallowest match first

    where ``exe`` carries ``.exe`` on Windows targets.
    """
    exe = triple.executable_name(binary_name)
    candidates = (
        root / f"{binary_name}-{version}-{triple}" / exe,
        root / exe,
    )
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    matches = sorted(
        (p for p in root.rglob(exe) if p.is_file()),
        key=lambda p: (len(p.relative_to(root).parts), str(p)),
    )
    if matches:
        logger.debug("Binary found by recursive search: %s", matches[0])
        return matches[0]
    raise BinaryNotFound(f"Binary not found in archive (looked for {exe})")


def make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | _EXEC_BITS)


def install_binary(
    source: Path,
    install_dir: Path,
    *,
    binary_name: str,
    version: ReleaseVersion,
    triple: TargetTriple,
) -> InstalledBinary:
    """Copy *source* into *install_dir*, replacing any existing binary.

    The directory is created if needed. Non-Windows targets get the
    executable bits set.
    """
    target = install_dir / triple.executable_name(binary_name)
    try:
        install_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        if not triple.is_windows:
            make_executable(target)
    except OSError as exc:
        raise InstallFailed(
            f"Installation failed: cannot write {target}: {exc}",
            hint="Choose a writable ASSAY_INSTALL_DIR or re-run with sufficient permissions.",
        ) from exc

    executable = target.is_file() and (triple.is_windows or os.access(target, os.X_OK))
    if not executable:
        raise InstallFailed(f"Installation failed: {target} is not an executable file")

    logger.info("Installed %s %s to %s", binary_name, version, target)
    return InstalledBinary(path=target, executable=executable, version=version, triple=triple)
