"""Amazon S3 object store backed by boto3.

URLs are virtual-hosted style over HTTPS::

    https://{bucket}.s3.amazonaws.com/{key}            (us-east-1)
    https://{bucket}.s3.{region}.amazonaws.com/{key}   (other regions)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3deployer.models.store import ConnectionParams, PutResult
from s3deployer.stores import StoreError

logger = logging.getLogger(__name__)

LEGACY_GLOBAL_REGION = "us-east-1"

# head_object reports a missing key with any of these codes
_MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def virtual_hosted_url(bucket: str, region: str, key: str) -> str:
    """Build the HTTPS virtual-hosted-style URL of an object."""
    if region == LEGACY_GLOBAL_REGION:
        host = f"{bucket}.s3.amazonaws.com"
    else:
        host = f"{bucket}.s3.{region}.amazonaws.com"
    return f"https://{host}/{quote(key, safe='/')}"


def _store_error(exc: Exception) -> StoreError:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return StoreError(str(error.get("Code", "Unknown")), str(error.get("Message", exc)))
    return StoreError(type(exc).__name__, str(exc))


class S3ObjectStore:
    """``ObjectStore`` over a boto3 S3 client.

    Parameters
    ----------
    client:
        A boto3 S3 client (or a stubbed one in tests).
    region:
        The bucket region, used to build object URLs.
    """

    def __init__(self, client: Any, region: str) -> None:
        self._client = client
        self._region = region

    @classmethod
    def from_params(
        cls,
        params: ConnectionParams,
        *,
        connect_timeout: float = 10.0,
        read_timeout: float = 60.0,
    ) -> S3ObjectStore:
        """Build a store from activation parameters.

        The ``"latest"`` version marker maps to boto3's default API
        version. Invalid regions and credential setup problems raise
        from here.
        """
        session = boto3.session.Session(
            aws_access_key_id=params.access_key,
            aws_secret_access_key=params.secret_key,
            region_name=params.region,
        )
        client = session.client(
            "s3",
            api_version=None if params.version == "latest" else params.version,
            config=Config(connect_timeout=connect_timeout, read_timeout=read_timeout),
        )
        logger.info("Created S3 client for region %s", params.region)
        return cls(client, params.region)

    @property
    def region(self) -> str:
        return self._region

    def exists(self, bucket: str, key: str) -> bool:
        try:
            self._client.head_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            if str(exc.response.get("Error", {}).get("Code", "")) in _MISSING_OBJECT_CODES:
                return False
            raise _store_error(exc) from exc
        except BotoCoreError as exc:
            raise _store_error(exc) from exc
        return True

    def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        acl: str,
        content_type: str | None = None,
    ) -> PutResult:
        request: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "ACL": acl,
            "Body": body,
        }
        if content_type:
            request["ContentType"] = content_type

        try:
            response = self._client.put_object(**request)
        except (ClientError, BotoCoreError) as exc:
            raise _store_error(exc) from exc

        return PutResult(
            url=self.object_url(bucket, key),
            etag=str(response.get("ETag", "")).strip('"'),
        )

    def object_url(self, bucket: str, key: str) -> str:
        return virtual_hosted_url(bucket, self._region, key)
