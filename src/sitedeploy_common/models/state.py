"""Activation and orchestration state enums."""

from __future__ import annotations

from enum import Enum


class ActivationState(str, Enum):
    """Lifecycle of one site config on the target host."""

    DISABLED = "disabled"
    STAGED_NOT_VALIDATED = "staged"
    VALIDATED = "validated"
    ACTIVE = "active"


class DeploymentPhase(str, Enum):
    CONNECTING = "connecting"
    UPLOADING = "uploading"
    PROVISIONING = "provisioning"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (DeploymentPhase.DONE, DeploymentPhase.FAILED)


ALLOWED_TRANSITIONS: dict[DeploymentPhase, frozenset[DeploymentPhase]] = {
    DeploymentPhase.CONNECTING: frozenset({DeploymentPhase.UPLOADING, DeploymentPhase.FAILED}),
    DeploymentPhase.UPLOADING: frozenset({DeploymentPhase.PROVISIONING, DeploymentPhase.FAILED}),
    DeploymentPhase.PROVISIONING: frozenset({DeploymentPhase.DONE, DeploymentPhase.FAILED}),
    DeploymentPhase.DONE: frozenset(),
    DeploymentPhase.FAILED: frozenset(),
}
