"""Shared Pydantic models."""

from sitedeploy_common.models.artifact import ArtifactFile, ArtifactSet
from sitedeploy_common.models.audit_event import AuditEvent
from sitedeploy_common.models.state import ALLOWED_TRANSITIONS, ActivationState, DeploymentPhase
from sitedeploy_common.models.target import DeploymentTarget, is_valid_hostname

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ActivationState",
    "ArtifactFile",
    "ArtifactSet",
    "AuditEvent",
    "DeploymentPhase",
    "DeploymentTarget",
    "is_valid_hostname",
]
