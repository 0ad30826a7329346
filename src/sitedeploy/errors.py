"""Custom exceptions for sitedeploy."""

from __future__ import annotations


class SiteDeployError(Exception):
    """Base exception for all sitedeploy operations.

    ``phase`` names the step that failed, ``output`` carries the remote
    command's combined stdout/stderr when there is one.
    """

    phase = "deploy"
    exit_code = 1

    def __init__(self, message: str, *, exit_code: int | None = None, output: str = ""):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code
        self.output = output


class InvalidTargetError(SiteDeployError):
    """Deployment target or artifact input is malformed."""

    phase = "input"
    exit_code = 2


class HostConnectionError(SiteDeployError):
    """Could not reach or keep a session with the target host."""

    phase = "connect"
    exit_code = 3


class AuthenticationError(HostConnectionError):
    """SSH authentication was rejected."""


class TransferError(SiteDeployError):
    """Creating the document root or uploading artifacts failed."""

    phase = "upload"
    exit_code = 4


class ProvisioningError(SiteDeployError):
    """The remote provisioning unit exited non-zero."""

    phase = "provision"
    exit_code = 5


class PackageInstallError(ProvisioningError):
    """Installing nginx/certbot on the target failed."""


class StagingError(ProvisioningError):
    """Writing or enabling the site config failed."""


class ConfigValidationError(ProvisioningError):
    """nginx -t rejected the configuration; nothing was reloaded."""

    phase = "validate"
    exit_code = 6


class ServiceReloadError(ProvisioningError):
    """nginx accepted the configuration but could not be reloaded."""

    phase = "activate"
    exit_code = 7


class VerificationError(SiteDeployError):
    """Post-deploy smoke check did not see the expected response."""

    phase = "verify"
    exit_code = 8
