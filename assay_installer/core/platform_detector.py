"""Platform detection: raw host strings -> ``TargetTriple``."""

from __future__ import annotations

import logging
import platform

from assay_installer.errors import (
    UnsupportedArchitecture,
    UnsupportedCombination,
    UnsupportedPlatform,
)
from assay_installer.models.platform import (
    Architecture,
    HostInfo,
    OsFamily,
    TargetTriple,
)

logger = logging.getLogger(__name__)

# Prefix match on the lower-cased OS name. "windows" is what Python itself
# reports on native Windows; the others come from uname under MSYS/Cygwin.
_OS_PREFIXES: tuple[tuple[str, OsFamily], ...] = (
    ("linux", OsFamily.LINUX_GNU),
    ("darwin", OsFamily.MACOS),
    ("mingw", OsFamily.WINDOWS_MSVC),
    ("msys", OsFamily.WINDOWS_MSVC),
    ("cygwin", OsFamily.WINDOWS_MSVC),
    ("windows", OsFamily.WINDOWS_MSVC),
)

_ARCH_ALIASES: dict[str, Architecture] = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
}


def probe_host() -> HostInfo:
    """Read the OS name and machine architecture of the running host."""
    return HostInfo(os_name=platform.system(), machine=platform.machine())


def detect_os_family(os_name: str) -> OsFamily:
    lowered = os_name.strip().lower()
    for prefix, family in _OS_PREFIXES:
        if lowered.startswith(prefix):
            return family
    raise UnsupportedPlatform(f"Unsupported operating system: {os_name}")


def detect_architecture(machine: str) -> Architecture:
    try:
        return _ARCH_ALIASES[machine.strip().lower()]
    except KeyError:
        raise UnsupportedArchitecture(f"Unsupported architecture: {machine}") from None


def detect_platform(os_name: str, machine: str) -> TargetTriple:
    """Map raw OS and machine strings to a ``TargetTriple``.

    Raises
    ------
    UnsupportedPlatform
        The OS name matches no known family.
    UnsupportedArchitecture
        The machine string is not x86_64/amd64 or arm64/aarch64.
    UnsupportedCombination
        Windows on anything but x86_64; no such builds are published.
    """
    os_family = detect_os_family(os_name)
    arch = detect_architecture(machine)

    if os_family is OsFamily.WINDOWS_MSVC and arch is not Architecture.X86_64:
        raise UnsupportedCombination(
            "Windows builds are only available for x86_64",
            hint=f"Detected architecture: {machine}",
        )

    triple = TargetTriple(arch=arch, os_family=os_family)
    logger.debug("Host %r/%r -> %s", os_name, machine, triple)
    return triple


def detect_host_platform(host: HostInfo | None = None) -> TargetTriple:
    """Detect the target triple of *host*, probing the local machine by default."""
    host = host or probe_host()
    return detect_platform(host.os_name, host.machine)
