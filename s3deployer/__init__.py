"""s3deployer: idempotent deployment of processed static assets to Amazon S3.

Each asset is stored under an object key derived from its name and a
change trigger (modification time, MD5 or SHA-1), so an unchanged asset
maps to an object that already exists and is never uploaded twice.

    from s3deployer import DeployerGate, FileAsset, S3Deployer, SettingsConfigurator
    from s3deployer.cache.memory import MemoryCache

    ready = DeployerGate(SettingsConfigurator()).activate()
    deployer = S3Deployer(ready, MemoryCache())
    outcome = deployer.ensure_deployed(FileAsset("dist/app.css"))
"""

__version__ = "0.1.0"
__description__ = "Idempotent deployment of processed static assets to Amazon S3"

from s3deployer.config import DeployerSettings, MappingConfigurator, SettingsConfigurator
from s3deployer.core.deployer import S3Deployer
from s3deployer.core.errors import (
    ActivationError,
    ConfigurationError,
    DeployError,
    DeployerError,
)
from s3deployer.core.gate import DeployerGate, ReadyDeployment
from s3deployer.models.asset import FileAsset
from s3deployer.models.triggers import ChangeTrigger

__all__ = [
    "ActivationError",
    "ChangeTrigger",
    "ConfigurationError",
    "DeployError",
    "DeployerError",
    "DeployerGate",
    "DeployerSettings",
    "FileAsset",
    "MappingConfigurator",
    "ReadyDeployment",
    "S3Deployer",
    "SettingsConfigurator",
    "__version__",
]
