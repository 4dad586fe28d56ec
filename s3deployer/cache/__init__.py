"""Lookup cache protocol and backend factory.

The cache only remembers which object keys are already deployed and at
what URL. No atomic updates are required: every writer for a key writes
the same URL, so last-writer-wins is fine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from s3deployer.config import DeployerSettings


@runtime_checkable
class KeyValueCache(Protocol):
    """String key/value cache with per-entry TTL."""

    def get(self, key: str) -> str | None:
        """Return the cached value, or None when absent or expired."""
        ...

    def save(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        ...


class UnknownCacheBackendError(ValueError):
    """Raised when settings name a cache backend that does not exist."""


def build_cache(settings: DeployerSettings) -> KeyValueCache:
    """Create the cache backend selected by ``settings.cache_backend``."""
    from s3deployer.cache.memory import MemoryCache
    from s3deployer.cache.sqlite import SqliteCache

    backend = settings.cache_backend.strip().lower()
    if backend == "memory":
        return MemoryCache()
    if backend == "sqlite":
        return SqliteCache(settings.cache_path)
    raise UnknownCacheBackendError(
        f"Unknown cache backend {settings.cache_backend!r}. Use 'sqlite' or 'memory'."
    )
