"""Object-store request and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConnectionParams(BaseModel):
    """The parameters a store client is built from.

    Exactly the credential pair, the bucket region and the API version
    marker. Secrets are excluded from ``repr``.
    """

    model_config = ConfigDict(frozen=True)

    access_key: str = Field(repr=False)
    secret_key: str = Field(repr=False)
    region: str
    version: str = "latest"


class PutResult(BaseModel):
    """What the store reports back after a successful upload."""

    model_config = ConfigDict(frozen=True)

    url: str
    etag: str = ""


class DeployOutcome(BaseModel):
    """Result of ``S3Deployer.ensure_deployed`` for one asset."""

    model_config = ConfigDict(frozen=True)

    object_key: str
    url: str
    uploaded: bool
