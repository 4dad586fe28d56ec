"""Deployer error hierarchy.

``ConfigurationError`` and ``ActivationError`` come out of the readiness
gate; ``DeployError`` out of an upload. Lookup-path problems are never
raised; they degrade to "not deployed".
"""

from __future__ import annotations


class DeployerError(RuntimeError):
    """Base class for every error raised by s3deployer."""


class ConfigurationError(DeployerError):
    """A required deployer setting is missing or empty.

    ``field`` names the first missing setting; ``missing`` lists all of
    them in declaration order.
    """

    def __init__(self, field: str, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.missing = missing or [field]


class ActivationError(DeployerError):
    """The store client could not be constructed from valid settings."""


class DeployError(DeployerError):
    """An upload failed. Carries the provider error code and message."""

    def __init__(self, object_key: str, code: str, message: str) -> None:
        super().__init__(f"Failed to deploy {object_key}: {code}: {message}")
        self.object_key = object_key
        self.code = code
        self.message = message


class InvalidTransitionError(DeployerError):
    """Raised when a readiness transition is not allowed."""
