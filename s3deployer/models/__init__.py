"""s3deployer data models."""

from s3deployer.models.asset import Asset, FileAsset
from s3deployer.models.readiness import VALID_TRANSITIONS, ReadinessState
from s3deployer.models.store import ConnectionParams, DeployOutcome, PutResult
from s3deployer.models.triggers import ChangeTrigger

__all__ = [
    # assets
    "Asset",
    "FileAsset",
    # readiness
    "ReadinessState",
    "VALID_TRANSITIONS",
    # store
    "ConnectionParams",
    "PutResult",
    "DeployOutcome",
    # triggers
    "ChangeTrigger",
]
