"""Installer configuration, env-driven.

Settings are read from ``ASSAY_*`` environment variables by pydantic-settings
and handed to the pipeline explicitly; nothing reads the environment after
the settings object has been built.

Examples
--------
Pin a release and install system-wide::

    export ASSAY_VERSION=v1.3.0
    export ASSAY_INSTALL_DIR=/usr/local/bin
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LATEST = "latest"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_install_dir() -> Path:
    return Path.home() / ".local" / "bin"


class InstallerSettings(BaseSettings):
    """Configuration for one installer run.

    ``version`` and ``install_dir`` are the user-facing overrides; the rest
    identify where releases live and rarely change outside of tests.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASSAY_",
        frozen=True,
    )

    # User overrides
    version: str = LATEST
    install_dir: Path = Field(default_factory=_default_install_dir)

    # Release identity
    github_repo: str = "assay-dev/assay"
    binary_name: str = "assay"
    release_host_base: str = "https://github.com"
    api_base: str = "https://api.github.com"
    github_token: str = ""  # optional, lifts anonymous API rate limits

    # Runtime
    http_timeout_seconds: float = 30.0
    log_level: str = "WARNING"

    @field_validator("install_dir", mode="after")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("version", mode="before")
    @classmethod
    def _blank_means_latest(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return LATEST
        return value.strip() if isinstance(value, str) else value

    @field_validator("release_host_base", "api_base", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def wants_latest(self) -> bool:
        """Whether the version must be resolved from release metadata."""
        return self.version == LATEST
