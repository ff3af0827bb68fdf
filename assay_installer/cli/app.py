"""Typer application for the installer.

Entry point: ``assay-install`` (configured via pyproject.toml scripts), or
``python -m assay_installer``. There are no subcommands and no options
beyond ``--help``; the run is configured from ``ASSAY_*`` environment
variables.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from assay_installer.config import InstallerSettings
from assay_installer.core.pipeline import run_install
from assay_installer.reporter import Reporter

app = typer.Typer(
    name="assay-install",
    help="Download, verify and install the prebuilt Assay binary.",
    rich_markup_mode="rich",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command(
    epilog=(
        "Environment: ASSAY_VERSION (default: latest), "
        "ASSAY_INSTALL_DIR (default: ~/.local/bin)."
    )
)
def install_cmd() -> None:
    """Install the Assay binary for this platform.

    Detects the platform, resolves the release, downloads and verifies the
    archive, then copies the binary into the install directory.
    """
    reporter = Reporter()
    try:
        settings = InstallerSettings()
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        reporter.error(
            f"Invalid configuration for {field or 'settings'}: {first.get('msg', exc)}",
            hint="Check the ASSAY_* environment variables.",
        )
        raise typer.Exit(code=2)

    configure_logging(settings.log_level)
    raise typer.Exit(code=run_install(settings, reporter=reporter))


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
