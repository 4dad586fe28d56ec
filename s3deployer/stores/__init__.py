"""Object store protocol for s3deployer.

A store answers two questions for the deployer: does an object exist
under a key, and put these bytes under a key. Provider failures are
raised as ``StoreError`` so the deployer never depends on a provider
SDK's exception types.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from s3deployer.models.store import PutResult


class StoreError(RuntimeError):
    """Raised when the remote store rejects or fails a request.

    Carries the provider error ``code`` and ``message`` for diagnostics.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol every object store backend implements."""

    def exists(self, bucket: str, key: str) -> bool:
        """Return True if an object is stored under ``key``."""
        ...

    def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        acl: str,
        content_type: str | None = None,
    ) -> PutResult:
        """Upload ``body`` under ``key`` and report the object's URL."""
        ...

    def object_url(self, bucket: str, key: str) -> str:
        """Return the canonical public URL for ``key``."""
        ...
