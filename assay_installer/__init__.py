"""Assay installer: fetch, verify and install a prebuilt ``assay`` binary.

The installer runs one linear pipeline per invocation:
detect platform -> resolve version -> locate artifact -> download
-> verify checksum -> extract -> install -> report.
"""

__version__ = "0.1.0"

from assay_installer.config import InstallerSettings
from assay_installer.core.pipeline import InstallPipeline, run_install

__all__ = ["InstallPipeline", "InstallerSettings", "run_install", "__version__"]
