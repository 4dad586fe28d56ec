"""Shared test fixtures for s3deployer."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from s3deployer.cache.memory import MemoryCache
from s3deployer.config import DEPLOYER_SECTION, MappingConfigurator
from s3deployer.core.deployer import S3Deployer
from s3deployer.core.gate import DeployerGate
from s3deployer.core.hasher import md5_hex, sha1_hex
from s3deployer.models.store import ConnectionParams, PutResult
from s3deployer.models.triggers import ChangeTrigger
from s3deployer.stores import StoreError
from s3deployer.stores.s3 import virtual_hosted_url


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeAsset:
    """In-memory asset with controllable name, content and mtime."""

    def __init__(
        self,
        filename: str = "logo",
        extension: str = "png",
        contents: bytes = b"\x89PNG fake image bytes",
        mtime: int = 1700000000,
        path: Path | None = None,
    ) -> None:
        self.filename = filename
        self.extension = extension
        self.contents = contents
        self.modified_timestamp = mtime
        self.full_path = path or Path(f"/tmp/{filename}.{extension}")
        self.output_url: str | None = None
        self.url_writes = 0

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "output_url" and value is not None:
            object.__setattr__(self, "url_writes", self.url_writes + 1)
        object.__setattr__(self, name, value)

    def get_contents(self) -> bytes:
        return self.contents

    def md5(self) -> str:
        return md5_hex(self.contents)

    def sha1(self) -> str:
        return sha1_hex(self.contents)


class FakeStore:
    """Records every call; existence and failures are configurable."""

    def __init__(self, region: str = "us-east-1") -> None:
        self.region = region
        self.objects: dict[tuple[str, str], bytes] = {}
        self.exists_calls: list[tuple[str, str]] = []
        self.put_calls: list[dict[str, Any]] = []
        self.put_error: StoreError | None = None
        self.exists_error: StoreError | None = None

    def exists(self, bucket: str, key: str) -> bool:
        self.exists_calls.append((bucket, key))
        if self.exists_error is not None:
            raise self.exists_error
        return (bucket, key) in self.objects

    def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        acl: str,
        content_type: str | None = None,
    ) -> PutResult:
        self.put_calls.append(
            {"bucket": bucket, "key": key, "body": body, "acl": acl, "content_type": content_type}
        )
        if self.put_error is not None:
            raise self.put_error
        self.objects[(bucket, key)] = body
        return PutResult(url=self.object_url(bucket, key), etag="etag-1")

    def object_url(self, bucket: str, key: str) -> str:
        return virtual_hosted_url(bucket, self.region, key)


class RecordingCache(MemoryCache):
    """MemoryCache that records saves and can be made to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.saves: list[tuple[str, str, int]] = []
        self.gets: list[str] = []
        self.fail_reads = False
        self.fail_writes = False

    def get(self, key: str) -> str | None:
        self.gets.append(key)
        if self.fail_reads:
            raise ConnectionError("cache backend down")
        return super().get(key)

    def save(self, key: str, value: str, ttl_seconds: int) -> None:
        if self.fail_writes:
            raise ConnectionError("cache backend down")
        self.saves.append((key, value, ttl_seconds))
        super().save(key, value, ttl_seconds)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def deployer_config() -> dict[str, Any]:
    """A complete ``amazons3_deployer`` section."""
    return {
        "aws_access_key": "AKIATEST",
        "aws_secret_key": "secret",
        "bucket": "mybucket",
        "bucket_region": "us-east-1",
        "autodetect_mime": False,
        "changes_trigger": "filemtime",
    }


@pytest.fixture
def make_configurator(
    deployer_config: dict[str, Any],
) -> Callable[..., MappingConfigurator]:
    """Factory fixture: configurator over the default section plus overrides."""

    def _factory(**overrides: Any) -> MappingConfigurator:
        section = dict(deployer_config)
        section.update(overrides)
        return MappingConfigurator({DEPLOYER_SECTION: section})

    return _factory


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def store_factory(store: FakeStore) -> Callable[[ConnectionParams], FakeStore]:
    """Store factory that records the params it was built from."""

    def _factory(params: ConnectionParams) -> FakeStore:
        _factory.params.append(params)  # type: ignore[attr-defined]
        return store

    _factory.params = []  # type: ignore[attr-defined]
    return _factory


@pytest.fixture
def make_deployer(
    make_configurator: Callable[..., MappingConfigurator],
    store: FakeStore,
    cache: RecordingCache,
) -> Callable[..., S3Deployer]:
    """Factory fixture: a deployer over the fake store and recording cache."""

    def _factory(
        trigger: ChangeTrigger = ChangeTrigger.FILEMTIME,
        autodetect_mime: bool = False,
        **kwargs: Any,
    ) -> S3Deployer:
        configurator = make_configurator(
            changes_trigger=trigger.value, autodetect_mime=autodetect_mime
        )
        ready = DeployerGate(configurator, lambda params: store).activate()
        return S3Deployer(ready, cache, **kwargs)

    return _factory


@pytest.fixture
def deployer(make_deployer: Callable[..., S3Deployer]) -> S3Deployer:
    return make_deployer()


@pytest.fixture
def gate(
    make_configurator: Callable[..., MappingConfigurator],
    store_factory: Callable[[ConnectionParams], FakeStore],
) -> DeployerGate:
    return DeployerGate(make_configurator(), store_factory)


@pytest.fixture
def asset() -> FakeAsset:
    return FakeAsset()


@pytest.fixture
def make_asset() -> Callable[..., FakeAsset]:
    """Factory fixture: build a FakeAsset with overrides."""

    def _factory(**overrides: Any) -> FakeAsset:
        return FakeAsset(**overrides)

    return _factory
