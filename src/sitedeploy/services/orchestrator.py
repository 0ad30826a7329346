"""Deployment orchestrator: connect, upload, provision, report."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, ContextManager

from rich.console import Console

from sitedeploy_common import (
    ActivationState,
    ArtifactSet,
    DeployConfig,
    DeploymentPhase,
    DeploymentTarget,
)
from sitedeploy_common.models import ALLOWED_TRANSITIONS

from sitedeploy.errors import (
    ConfigValidationError,
    InvalidTargetError,
    PackageInstallError,
    ProvisioningError,
    ServiceReloadError,
    StagingError,
)
from sitedeploy.services.followups import follow_up_steps
from sitedeploy.services.provisioning import UnitExit, build_unit, parse_activation_state
from sitedeploy.services.transport import CommandResult, Session, open_session

SessionFactory = Callable[[DeploymentTarget, DeployConfig], ContextManager[Session]]

_EXIT_ERRORS: dict[int, type[ProvisioningError]] = {
    UnitExit.PACKAGE_INSTALL: PackageInstallError,
    UnitExit.STAGE: StagingError,
    UnitExit.ENABLE: StagingError,
    UnitExit.VALIDATE: ConfigValidationError,
    UnitExit.RELOAD: ServiceReloadError,
}

_EXIT_MESSAGES: dict[int, str] = {
    UnitExit.PACKAGE_INSTALL: "Installing nginx/certbot failed",
    UnitExit.STAGE: "Staging the site config failed",
    UnitExit.ENABLE: "Enabling the site failed",
    UnitExit.VALIDATE: "nginx -t rejected the new config; the previous config is still active",
    UnitExit.RELOAD: "nginx accepted the config but did not reload",
}


def error_for_exit(result: CommandResult) -> ProvisioningError:
    """Map the provisioning unit's exit status to an error kind."""
    cls = _EXIT_ERRORS.get(result.exit_status, ProvisioningError)
    message = _EXIT_MESSAGES.get(
        result.exit_status, f"Provisioning unit exited with status {result.exit_status}"
    )
    return cls(message, output=result.output)


@dataclass
class DeploymentResult:
    target: DeploymentTarget
    phase: DeploymentPhase
    activation: ActivationState
    document_root: str
    output: str = ""
    follow_ups: list[str] = field(default_factory=list)
    duration_ms: int = 0


class Orchestrator:
    """Drives one deployment through CONNECTING -> UPLOADING -> PROVISIONING -> DONE.

    Any error moves it to FAILED and is re-raised unchanged. There is no
    rollback: the provisioning unit never reloads nginx with a config that
    failed ``nginx -t``, so a failed run leaves the previous site serving.
    Instances are single-use.
    """

    def __init__(
        self,
        cfg: DeployConfig,
        *,
        session_factory: SessionFactory = open_session,
        console: Console | None = None,
    ):
        self.cfg = cfg
        self._session_factory = session_factory
        self.console = console or Console()
        self.phase = DeploymentPhase.CONNECTING
        self.history: list[DeploymentPhase] = [DeploymentPhase.CONNECTING]

    def _advance(self, phase: DeploymentPhase) -> None:
        if phase not in ALLOWED_TRANSITIONS[self.phase]:
            raise RuntimeError(f"Illegal deployment transition {self.phase.value} -> {phase.value}")
        self.phase = phase
        self.history.append(phase)

    def run(self, target: DeploymentTarget, artifacts: ArtifactSet) -> DeploymentResult:
        if len(self.history) > 1:
            raise RuntimeError("Orchestrator has already run; create a new one per deployment")
        if not len(artifacts):
            raise InvalidTargetError("Artifact set is empty; nothing to deploy")

        # Rendering is pure, so do it before touching the network.
        unit = build_unit(target, self.cfg)
        document_root = self.cfg.document_root_for(target.site_name)
        start = time.monotonic()

        try:
            self.console.print(f"[bold][1/3][/bold] Connecting to {target.address}")
            with self._session_factory(target, self.cfg) as session:
                self._advance(DeploymentPhase.UPLOADING)
                self.console.print(
                    f"[bold][2/3][/bold] Uploading {len(artifacts)} file(s) "
                    f"({artifacts.total_bytes} bytes) to {document_root}"
                )
                session.make_dir(document_root)
                session.upload_tree(artifacts, document_root)

                self._advance(DeploymentPhase.PROVISIONING)
                self.console.print(
                    f"[bold][3/3][/bold] Provisioning nginx site {unit.site_name} "
                    "(install, stage, enable, validate, reload)"
                )
                result = session.execute(unit.command(sudo=session.needs_sudo))
                if not result.ok:
                    raise error_for_exit(result)
        except Exception:
            self._advance(DeploymentPhase.FAILED)
            raise

        self._advance(DeploymentPhase.DONE)
        return DeploymentResult(
            target=target,
            phase=self.phase,
            activation=parse_activation_state(result.output),
            document_root=document_root,
            output=result.output,
            follow_ups=follow_up_steps(target),
            duration_ms=int((time.monotonic() - start) * 1000),
        )
