"""Filesystem object store: buckets are directories under a root.

Used for dry runs and local pipelines. Layout: {root}/{bucket}/{key}.
ACLs and content types are accepted and ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from s3deployer.models.store import PutResult
from s3deployer.stores import StoreError

logger = logging.getLogger(__name__)


class LocalObjectStore:
    """``ObjectStore`` that writes objects to the local filesystem.

    Parameters
    ----------
    root:
        Directory holding one sub-directory per bucket.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def _object_path(self, bucket: str, key: str) -> Path:
        bucket_dir = (self._root / bucket).resolve()
        path = (bucket_dir / key).resolve()
        if bucket_dir.parent != self._root or not path.is_relative_to(bucket_dir):
            raise StoreError("InvalidKey", f"Key escapes bucket directory: {bucket}/{key}")
        return path

    def exists(self, bucket: str, key: str) -> bool:
        return self._object_path(bucket, key).is_file()

    def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        acl: str,
        content_type: str | None = None,
    ) -> PutResult:
        path = self._object_path(bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        except OSError as exc:
            raise StoreError(type(exc).__name__, str(exc)) from exc
        logger.debug("LocalObjectStore: wrote %d bytes to %s", len(body), path)
        return PutResult(url=path.as_uri())

    def object_url(self, bucket: str, key: str) -> str:
        return self._object_path(bucket, key).as_uri()
