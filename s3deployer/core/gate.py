"""Readiness gate: validates configuration and builds the store client.

The gate is the only way to obtain a ``ReadyDeployment``, and a deployer
can only be built from one, so no upload can happen before activation.

Activation is strict: ``activate()`` raises ``ConfigurationError`` for a
missing setting and ``ActivationError`` when the store client cannot be
built. Pipelines that can fall back to another deployer use
``is_supported()``, which turns those two errors into ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from s3deployer.config import DEPLOYER_SECTION, Configurator
from s3deployer.core.errors import ActivationError, ConfigurationError, InvalidTransitionError
from s3deployer.models.readiness import VALID_TRANSITIONS, ReadinessState
from s3deployer.models.store import ConnectionParams
from s3deployer.models.triggers import ChangeTrigger
from s3deployer.stores import ObjectStore

logger = logging.getLogger(__name__)

# Settings that must be non-empty, in the order they are reported.
REQUIRED_SETTINGS: tuple[str, ...] = (
    "aws_access_key",
    "aws_secret_key",
    "bucket",
    "bucket_region",
)

API_VERSION = "latest"

StoreFactory = Callable[[ConnectionParams], ObjectStore]

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})

# Only activate() holds this, so only a gate can issue a ReadyDeployment.
_ACTIVATION_SEAL = object()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _default_store_factory(params: ConnectionParams) -> ObjectStore:
    from s3deployer.stores.s3 import S3ObjectStore

    return S3ObjectStore.from_params(params)


class ReadyDeployment(BaseModel):
    """Capability token proving a gate reached READY.

    Holds the store client and every setting fixed at activation time,
    including the change trigger. Only ``DeployerGate.activate()`` can
    create one; direct construction fails validation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    store: ObjectStore
    bucket: str
    region: str
    trigger: ChangeTrigger = ChangeTrigger.FILEMTIME
    autodetect_mime: bool = False
    seal: Any = Field(default=None, repr=False, exclude=True)

    @model_validator(mode="after")
    def _issued_by_gate(self) -> ReadyDeployment:
        if self.seal is not _ACTIVATION_SEAL:
            raise ValueError("ReadyDeployment is only issued by DeployerGate.activate()")
        return self


class DeployerGate:
    """Two-state readiness machine for one S3 deployer.

    Parameters
    ----------
    configurator:
        Source of the ``amazons3_deployer`` settings.
    store_factory:
        Builds the store client from ``ConnectionParams``. Defaults to a
        boto3-backed ``S3ObjectStore``.
    """

    def __init__(
        self,
        configurator: Configurator,
        store_factory: StoreFactory | None = None,
    ) -> None:
        self._configurator = configurator
        self._store_factory = store_factory or _default_store_factory
        self._state = ReadinessState.UNCONFIGURED
        self._ready: ReadyDeployment | None = None

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == ReadinessState.READY

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self) -> ReadyDeployment:
        """Validate settings, build the store client and become READY.

        Returns the same token on every call once READY.

        Raises
        ------
        ConfigurationError
            If any of ``REQUIRED_SETTINGS`` is missing or empty.
        ActivationError
            If the store client cannot be constructed.
        """
        if self._ready is not None:
            return self._ready

        values = {
            key: self._configurator.get_config(DEPLOYER_SECTION, key)
            for key in (*REQUIRED_SETTINGS, "autodetect_mime", "changes_trigger")
        }

        missing = [key for key in REQUIRED_SETTINGS if _is_empty(values[key])]
        if missing:
            msg = (
                f"S3 deployer is not configured: missing {', '.join(missing)} "
                f"in section '{DEPLOYER_SECTION}'."
            )
            logger.error(msg)
            raise ConfigurationError(missing[0], msg, missing)

        params = ConnectionParams(
            access_key=str(values["aws_access_key"]).strip(),
            secret_key=str(values["aws_secret_key"]).strip(),
            region=str(values["bucket_region"]).strip(),
            version=API_VERSION,
        )

        try:
            store = self._store_factory(params)
        except Exception as exc:  # noqa: BLE001
            logger.error("Could not create store client for region %s: %s", params.region, exc)
            raise ActivationError(
                f"Could not create store client for region {params.region!r}: {exc}"
            ) from exc

        ready = ReadyDeployment(
            store=store,
            bucket=str(values["bucket"]).strip(),
            region=params.region,
            trigger=ChangeTrigger.parse(values["changes_trigger"]),
            autodetect_mime=_as_bool(values["autodetect_mime"]),
            seal=_ACTIVATION_SEAL,
        )
        self._transition(ReadinessState.READY)
        self._ready = ready
        logger.info(
            "S3 deployer ready: bucket=%s region=%s trigger=%s",
            ready.bucket,
            ready.region,
            ready.trigger.value,
        )
        return ready

    def is_supported(self) -> bool:
        """Return whether this deployer can be used right now.

        Never raises for configuration or activation problems; they are
        logged and reported as ``False``.
        """
        try:
            self.activate()
        except (ConfigurationError, ActivationError) as exc:
            logger.warning("S3 deployer unavailable: %s", exc)
            return False
        return True

    def _transition(self, target: ReadinessState) -> None:
        if target not in VALID_TRANSITIONS.get(self._state, set()):
            raise InvalidTransitionError(
                f"Cannot transition deployer from {self._state.value} to {target.value}"
            )
        self._state = target
