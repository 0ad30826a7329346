"""sitedeploy common: shared models, constants and configuration."""

from sitedeploy_common.config import DeployConfig
from sitedeploy_common.constants import (
    API_PREFIX,
    DEFAULT_UPSTREAM,
    DOCUMENT_ROOT_PATTERN,
    GZIP_MIN_LENGTH,
    GZIP_TYPES,
    LISTEN_PORT,
    NGINX_SITES_AVAILABLE,
    NGINX_SITES_ENABLED,
    REMOTE_PACKAGES,
    SECURITY_HEADERS,
    STATIC_ASSET_CACHE_CONTROL,
    STATIC_ASSET_EXPIRES,
    STATIC_ASSET_EXTENSIONS,
)
from sitedeploy_common.models import (
    ActivationState,
    ArtifactFile,
    ArtifactSet,
    AuditEvent,
    DeploymentPhase,
    DeploymentTarget,
)

__all__ = [
    "API_PREFIX",
    "ActivationState",
    "ArtifactFile",
    "ArtifactSet",
    "AuditEvent",
    "DEFAULT_UPSTREAM",
    "DOCUMENT_ROOT_PATTERN",
    "DeployConfig",
    "DeploymentPhase",
    "DeploymentTarget",
    "GZIP_MIN_LENGTH",
    "GZIP_TYPES",
    "LISTEN_PORT",
    "NGINX_SITES_AVAILABLE",
    "NGINX_SITES_ENABLED",
    "REMOTE_PACKAGES",
    "SECURITY_HEADERS",
    "STATIC_ASSET_CACHE_CONTROL",
    "STATIC_ASSET_EXPIRES",
    "STATIC_ASSET_EXTENSIONS",
]
