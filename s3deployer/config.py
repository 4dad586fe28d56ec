"""Deployer configuration: env-driven settings and the Configurator seam.

Settings are read from ``S3DEPLOYER_*`` environment variables or a .env
file via pydantic-settings. The deployer itself never reads settings
directly; it asks a ``Configurator`` for ``(section, key)`` pairs, so an
embedding pipeline can plug in its own configuration source.

Examples
--------
Configure via environment::

    export S3DEPLOYER_AWS_ACCESS_KEY=AKIA...
    export S3DEPLOYER_AWS_SECRET_KEY=...
    export S3DEPLOYER_BUCKET=static-assets
    export S3DEPLOYER_BUCKET_REGION=eu-west-1
    export S3DEPLOYER_CHANGES_TRIGGER=md5
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic_settings import BaseSettings, SettingsConfigDict

DEPLOYER_SECTION = "amazons3_deployer"
APP_SECTION = "app"

DEPLOYER_KEYS: tuple[str, ...] = (
    "aws_access_key",
    "aws_secret_key",
    "bucket",
    "bucket_region",
    "autodetect_mime",
    "changes_trigger",
)


@runtime_checkable
class Configurator(Protocol):
    """Flat ``(section, key)`` configuration lookup.

    Returns ``None`` for anything that is not configured.
    """

    def get_config(self, section: str, key: str) -> Any:
        ...


class DeployerSettings(BaseSettings):
    """Settings for the S3 deployer and the tooling around it."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="S3DEPLOYER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # amazons3_deployer section
    aws_access_key: str = ""
    aws_secret_key: str = ""
    bucket: str = ""
    bucket_region: str = ""
    autodetect_mime: bool = False
    changes_trigger: str = "filemtime"

    # Runtime
    log_level: str = "INFO"

    # Lookup cache
    cache_backend: str = "sqlite"  # "sqlite" | "memory"
    cache_path: Path = Path(".s3deployer/cache.db")

    # Object store
    store_backend: str = "s3"  # "s3" | "local"
    local_store_root: Path = Path(".s3deployer/buckets")
    connect_timeout: float = 10.0
    read_timeout: float = 60.0


class SettingsConfigurator:
    """Exposes ``DeployerSettings`` through the ``Configurator`` protocol.

    Deployer keys live under ``amazons3_deployer``; everything else
    under ``app``.
    """

    def __init__(self, settings: DeployerSettings | None = None) -> None:
        self.settings = settings or DeployerSettings()

    def get_config(self, section: str, key: str) -> Any:
        if section == DEPLOYER_SECTION:
            in_section = key in DEPLOYER_KEYS
        elif section == APP_SECTION:
            in_section = key in DeployerSettings.model_fields and key not in DEPLOYER_KEYS
        else:
            in_section = False
        return getattr(self.settings, key) if in_section else None


class MappingConfigurator:
    """A ``Configurator`` over a plain ``{section: {key: value}}`` mapping."""

    def __init__(self, data: Mapping[str, Mapping[str, Any]]) -> None:
        self._data = {section: dict(values) for section, values in data.items()}

    def get_config(self, section: str, key: str) -> Any:
        return self._data.get(section, {}).get(key)
