"""Deployer readiness state machine: one-way UNCONFIGURED -> READY."""

from __future__ import annotations

from enum import Enum


class ReadinessState(str, Enum):
    """Readiness of a deployer gate."""

    UNCONFIGURED = "unconfigured"
    READY = "ready"


# READY is terminal; a gate never returns to UNCONFIGURED.
VALID_TRANSITIONS: dict[ReadinessState, set[ReadinessState]] = {
    ReadinessState.UNCONFIGURED: {ReadinessState.READY},
    ReadinessState.READY: set(),
}
