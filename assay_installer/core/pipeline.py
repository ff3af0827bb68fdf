"""Installer pipeline: the single coordinator for one installation run.

Stages run strictly in order and each feeds the next:

    detect platform -> resolve version -> locate artifact -> download
        -> verify -> extract -> install -> report

Stages raise ``InstallerError`` subclasses and the pipeline lets them
propagate; the workspace guard has already removed every temporary file by
the time an error leaves ``InstallPipeline.run()``. ``run_install()`` is the
one place that converts an outcome into an exit status.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests
from rich.markup import escape

from assay_installer.config import InstallerSettings
from assay_installer.core.artifact_locator import locate_artifact
from assay_installer.core.extractor import extract_archive
from assay_installer.core.fetcher import Fetcher
from assay_installer.core.installer import install_binary, locate_binary
from assay_installer.core.platform_detector import detect_host_platform
from assay_installer.core.verifier import verify_archive
from assay_installer.core.version_resolver import resolve_version
from assay_installer.core.workspace import Workspace
from assay_installer.errors import DownloadFailed, InstallerError
from assay_installer.models.artifacts import ArtifactReference, InstallOutcome
from assay_installer.models.platform import HostInfo, TargetTriple
from assay_installer.models.release import ReleaseVersion
from assay_installer.reporter import Reporter, is_on_path

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class InstallPipeline:
    """Runs one installation from platform detection to the final report.

    Parameters
    ----------
    settings:
        Explicit configuration for this run.
    reporter:
        Progress output. A default Rich reporter is created if not provided.
    session:
        HTTP session handed to the ``Fetcher``.
    host:
        Host OS/machine to target. Probed from the running interpreter by
        default.
    workspace_parent:
        Where to create the temporary workspace. System temp dir by default.
    path_env:
        ``PATH`` value used for the PATH hint. ``os.environ`` by default.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        *,
        reporter: Reporter | None = None,
        session: requests.Session | None = None,
        host: HostInfo | None = None,
        workspace_parent: Path | None = None,
        path_env: str | None = None,
    ) -> None:
        self.settings = settings
        self.reporter = reporter or Reporter()
        self.fetcher = Fetcher(session, timeout=settings.http_timeout_seconds)
        self._host = host
        self._workspace_parent = workspace_parent
        self._path_env = path_env

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> InstallOutcome:
        """Execute every stage in order and return what was installed."""
        settings = self.settings
        reporter = self.reporter

        reporter.banner()

        triple = detect_host_platform(self._host)
        reporter.info(f"Detected platform: [bold]{escape(str(triple))}[/bold]")

        version = self._resolve_version()
        reporter.info(f"Version: [bold]{escape(str(version))}[/bold]")

        artifact = locate_artifact(
            settings.github_repo,
            version,
            triple,
            binary_name=settings.binary_name,
            release_host_base=settings.release_host_base,
        )

        with Workspace(self._workspace_parent) as workspace:
            archive = self._download_archive(artifact, workspace, version, triple)

            reporter.info("Verifying checksum...")
            checksum_text = self._fetch_checksum(artifact, workspace)
            verification = verify_archive(archive, checksum_text)
            if verification.verified:
                reporter.success("Checksum verified")
            else:
                reporter.warn("Could not download checksum file, skipping verification")

            reporter.info("Extracting...")
            extract_root = extract_archive(archive, workspace.file("extract"))
            binary = locate_binary(
                extract_root,
                binary_name=settings.binary_name,
                version=version,
                triple=triple,
            )

            reporter.info(f"Installing to [bold]{escape(str(settings.install_dir))}[/bold]...")
            installed = install_binary(
                binary,
                settings.install_dir,
                binary_name=settings.binary_name,
                version=version,
                triple=triple,
            )

        reporter.blank()
        reporter.success(f"Assay {escape(str(version))} installed successfully!")
        reporter.blank()

        path_configured = is_on_path(settings.install_dir, self._path_env)
        if not path_configured:
            reporter.path_hint(settings.install_dir)
        reporter.next_steps(settings.binary_name)

        return InstallOutcome(
            installed=installed,
            artifact=artifact,
            verification=verification,
            path_configured=path_configured,
        )

    # ------------------------------------------------------------------
    # Stage helpers
    # ------------------------------------------------------------------

    def _resolve_version(self) -> ReleaseVersion:
        if self.settings.wants_latest:
            self.reporter.info("Fetching latest version...")
        return resolve_version(
            self.settings.version,
            fetcher=self.fetcher,
            api_base=self.settings.api_base,
            repo=self.settings.github_repo,
            token=self.settings.github_token,
        )

    def _download_archive(
        self,
        artifact: ArtifactReference,
        workspace: Workspace,
        version: ReleaseVersion,
        triple: TargetTriple,
    ) -> Path:
        self.reporter.info(f"Downloading {escape(artifact.archive_name)}...")
        self.reporter.detail(artifact.download_url)
        try:
            return self.fetcher.download(
                artifact.download_url, workspace.file(f"archive.{triple.archive_ext}")
            )
        except DownloadFailed as exc:
            if exc.hint is None:
                exc.hint = f"Check if version {version} exists for {triple}"
            raise

    def _fetch_checksum(self, artifact: ArtifactReference, workspace: Workspace) -> str | None:
        """Checksum file contents, or ``None`` if it could not be fetched."""
        try:
            path = self.fetcher.download(artifact.checksum_url, workspace.file("archive.sha256"))
        except DownloadFailed as exc:
            logger.info("Checksum unavailable: %s", exc)
            return None
        return path.read_text(encoding="utf-8", errors="replace")


def run_install(
    settings: InstallerSettings,
    *,
    reporter: Reporter | None = None,
    **pipeline_kwargs,
) -> int:
    """Run the installer and return the process exit status.

    Every ``InstallerError`` becomes a one-line diagnostic on stderr and
    status 1; an interrupt becomes status 130. The workspace has been
    cleaned up before either is reported.
    """
    reporter = reporter or Reporter()
    pipeline = InstallPipeline(settings, reporter=reporter, **pipeline_kwargs)
    try:
        pipeline.run()
    except InstallerError as exc:
        logger.debug("Installer failed with %s", exc.kind.value, exc_info=True)
        reporter.error(exc.message, hint=exc.hint)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        reporter.error("Installation interrupted")
        return EXIT_INTERRUPTED
    return EXIT_OK
