"""Tests for deployer settings and configurators."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from s3deployer.config import (
    APP_SECTION,
    DEPLOYER_SECTION,
    Configurator,
    DeployerSettings,
    MappingConfigurator,
    SettingsConfigurator,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("S3DEPLOYER_"):
            monkeypatch.delenv(name)


class TestDeployerSettings:
    def test_defaults(self):
        settings = DeployerSettings(_env_file=None)
        assert settings.bucket == ""
        assert settings.autodetect_mime is False
        assert settings.changes_trigger == "filemtime"
        assert settings.log_level == "INFO"
        assert settings.cache_backend == "sqlite"
        assert settings.cache_path == Path(".s3deployer/cache.db")
        assert settings.store_backend == "s3"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("S3DEPLOYER_BUCKET", "static-assets")
        monkeypatch.setenv("S3DEPLOYER_AUTODETECT_MIME", "true")
        monkeypatch.setenv("S3DEPLOYER_CHANGES_TRIGGER", "sha1")
        settings = DeployerSettings(_env_file=None)
        assert settings.bucket == "static-assets"
        assert settings.autodetect_mime is True
        assert settings.changes_trigger == "sha1"

    def test_fields(self):
        assert set(DeployerSettings.model_fields) == {
            "aws_access_key",
            "aws_secret_key",
            "bucket",
            "bucket_region",
            "autodetect_mime",
            "changes_trigger",
            "log_level",
            "cache_backend",
            "cache_path",
            "store_backend",
            "local_store_root",
            "connect_timeout",
            "read_timeout",
        }

    def test_invalid_value_names_the_field(self, monkeypatch):
        monkeypatch.setenv("S3DEPLOYER_AUTODETECT_MIME", "maybe")
        with pytest.raises(ValidationError) as excinfo:
            DeployerSettings(_env_file=None)
        assert excinfo.value.errors()[0]["loc"] == ("autodetect_mime",)

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("S3DEPLOYER_BUCKET_REGION=eu-central-1\n")
        settings = DeployerSettings(_env_file=env_file)
        assert settings.bucket_region == "eu-central-1"


class TestSettingsConfigurator:
    def test_deployer_section(self):
        settings = DeployerSettings(_env_file=None, bucket="b", aws_access_key="AKIA")
        configurator = SettingsConfigurator(settings)
        assert configurator.get_config(DEPLOYER_SECTION, "bucket") == "b"
        assert configurator.get_config(DEPLOYER_SECTION, "aws_access_key") == "AKIA"

    def test_app_section(self):
        configurator = SettingsConfigurator(DeployerSettings(_env_file=None))
        assert configurator.get_config(APP_SECTION, "log_level") == "INFO"
        assert configurator.get_config(APP_SECTION, "bucket") is None

    def test_unknown_lookups_are_none(self):
        configurator = SettingsConfigurator(DeployerSettings(_env_file=None))
        assert configurator.get_config(DEPLOYER_SECTION, "log_level") is None
        assert configurator.get_config("other_deployer", "bucket") is None

    def test_satisfies_protocol(self):
        assert isinstance(SettingsConfigurator(DeployerSettings(_env_file=None)), Configurator)


class TestMappingConfigurator:
    def test_lookup(self):
        configurator = MappingConfigurator({DEPLOYER_SECTION: {"bucket": "b"}})
        assert configurator.get_config(DEPLOYER_SECTION, "bucket") == "b"
        assert configurator.get_config(DEPLOYER_SECTION, "bucket_region") is None
        assert configurator.get_config("missing", "bucket") is None
