"""S3 deployer: the "already deployed?" decision in front of the upload.

Lookup order for ``get_deployed_file``:

1. Lookup cache (a hit returns immediately).
2. Remote existence check (a hit is written back to the cache).
3. Not deployed.

``deploy`` always uploads. A successful upload is recorded in the cache
under the same key and TTL a remote hit would use.

Both operations return the deployed URL and set ``asset.output_url`` to
it; that is the only change made to an asset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from s3deployer.cache import KeyValueCache
from s3deployer.core.errors import DeployError
from s3deployer.core.gate import ReadyDeployment
from s3deployer.core.identity import compute_object_key, derive_cache_key
from s3deployer.core.mime import detect_mime_type
from s3deployer.models.asset import Asset
from s3deployer.models.store import DeployOutcome
from s3deployer.models.triggers import ChangeTrigger
from s3deployer.stores import StoreError

logger = logging.getLogger(__name__)

CACHE_TTL = 3600
ACL_PUBLIC_READ = "public-read"

MimeDetector = Callable[[Asset], str | None]


class S3Deployer:
    """Deploys assets to one bucket through an activated store.

    Parameters
    ----------
    ready:
        Token returned by ``DeployerGate.activate()``.
    cache:
        Lookup cache shared with other deployers of the same bucket.
    mime_detector:
        Content-type resolver used when MIME autodetection is enabled.
    """

    def __init__(
        self,
        ready: ReadyDeployment,
        cache: KeyValueCache,
        *,
        mime_detector: MimeDetector = detect_mime_type,
    ) -> None:
        if not isinstance(ready, ReadyDeployment):
            raise TypeError(
                "S3Deployer requires the ReadyDeployment returned by DeployerGate.activate()"
            )
        self._ready = ready
        self._store = ready.store
        self._cache = cache
        self._mime_detector = mime_detector

    @property
    def bucket(self) -> str:
        return self._ready.bucket

    @property
    def trigger(self) -> ChangeTrigger:
        return self._ready.trigger

    def object_key(self, asset: Asset) -> str:
        """Return the object key ``asset`` is (or would be) stored under."""
        return compute_object_key(asset, self._ready.trigger)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_deployed_file(self, asset: Asset) -> str | None:
        """Return the URL of an already deployed asset, or None.

        Cache and existence-check failures count as "not deployed" so
        they never block the upload path.
        """
        object_key = self.object_key(asset)
        cache_key = derive_cache_key(object_key)

        cached_url = self._cache_get(cache_key)
        if cached_url is not None:
            logger.debug("Cache hit for %s", object_key)
            asset.output_url = cached_url
            return cached_url

        try:
            exists = self._store.exists(self.bucket, object_key)
        except StoreError as exc:
            logger.warning(
                "Existence check for %s/%s failed; treating as not deployed: %s",
                self.bucket,
                object_key,
                exc,
            )
            return None

        if not exists:
            return None

        url = self._store.object_url(self.bucket, object_key)
        self._cache_save(cache_key, url)
        asset.output_url = url
        logger.debug("Found %s in bucket %s", object_key, self.bucket)
        return url

    def is_previously_deployed(self, asset: Asset) -> bool:
        return self.get_deployed_file(asset) is not None

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------

    def deploy(self, asset: Asset) -> str:
        """Upload ``asset`` and return its public URL.

        Raises
        ------
        DeployError
            If the store rejects the upload. Nothing is cached and the
            asset is left untouched.
        """
        object_key = self.object_key(asset)
        request: dict[str, Any] = {
            "bucket": self.bucket,
            "key": object_key,
            "body": asset.get_contents(),
            "acl": ACL_PUBLIC_READ,
        }

        if self._ready.autodetect_mime:
            content_type = self._detect_mime(asset)
            if content_type:
                request["content_type"] = content_type

        try:
            result = self._store.put(**request)
        except StoreError as exc:
            logger.error("Upload of %s to %s failed: %s", object_key, self.bucket, exc)
            raise DeployError(object_key, exc.code, exc.message) from exc

        self._cache_save(derive_cache_key(object_key), result.url)
        asset.output_url = result.url
        logger.info("Deployed %s to %s", object_key, result.url)
        return result.url

    def ensure_deployed(self, asset: Asset, *, force: bool = False) -> DeployOutcome:
        """Look the asset up and upload it only when it is not deployed."""
        object_key = self.object_key(asset)
        if not force:
            url = self.get_deployed_file(asset)
            if url is not None:
                return DeployOutcome(object_key=object_key, url=url, uploaded=False)
        url = self.deploy(asset)
        return DeployOutcome(object_key=object_key, url=url, uploaded=True)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _detect_mime(self, asset: Asset) -> str | None:
        try:
            return self._mime_detector(asset)
        except Exception as exc:  # noqa: BLE001
            logger.debug("MIME detection failed for %r: %s", asset, exc)
            return None

    def _cache_get(self, cache_key: str) -> str | None:
        try:
            return self._cache.get(cache_key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache read for %s failed: %s", cache_key, exc)
            return None

    def _cache_save(self, cache_key: str, url: str) -> None:
        try:
            self._cache.save(cache_key, url, CACHE_TTL)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Cache write for %s failed: %s", cache_key, exc)
