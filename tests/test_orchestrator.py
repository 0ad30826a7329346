"""Tests for the deployment orchestrator with an in-memory session."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import pytest
from rich.console import Console

from sitedeploy_common import ActivationState, ArtifactSet, DeployConfig, DeploymentPhase, DeploymentTarget
from sitedeploy.errors import (
    ConfigValidationError,
    HostConnectionError,
    InvalidTargetError,
    PackageInstallError,
    ProvisioningError,
    ServiceReloadError,
    StagingError,
    TransferError,
)
from sitedeploy.services.orchestrator import Orchestrator, error_for_exit
from sitedeploy.services.provisioning import UnitExit
from sitedeploy.services.transport import CommandResult

_ACTIVE_OUTPUT = (
    "==> [1/5] Checking for nginx\n"
    "sitedeploy-state: staged\n"
    "sitedeploy-state: validated\n"
    "sitedeploy-state: active\n"
)


class FakeSession:
    def __init__(self, target: DeploymentTarget, *, exit_status: int = 0, output: str = _ACTIVE_OUTPUT):
        self.target = target
        self.calls: list[tuple] = []
        self._exit_status = exit_status
        self._output = output
        self.fail_upload = False

    @property
    def needs_sudo(self) -> bool:
        return self.target.user != "root"

    def make_dir(self, path: str) -> None:
        self.calls.append(("make_dir", path))

    def upload_tree(self, artifacts: ArtifactSet, remote_dir: str) -> None:
        self.calls.append(("upload_tree", [f.path for f in artifacts.files], remote_dir))
        if self.fail_upload:
            raise TransferError("upload failed", output="scp: broken pipe")

    def execute(self, command: str) -> CommandResult:
        self.calls.append(("execute", command))
        return CommandResult(exit_status=self._exit_status, output=self._output)


class FakeFactory:
    def __init__(self, **session_kwargs):
        self.session_kwargs = session_kwargs
        self.sessions: list[FakeSession] = []
        self.closed = 0
        self.connect_error: Exception | None = None
        self.fail_upload = False

    @contextmanager
    def __call__(self, target: DeploymentTarget, cfg: DeployConfig) -> Iterator[FakeSession]:
        if self.connect_error is not None:
            raise self.connect_error
        session = FakeSession(target, **self.session_kwargs)
        session.fail_upload = self.fail_upload
        self.sessions.append(session)
        try:
            yield session
        finally:
            self.closed += 1


def _orchestrator(cfg: DeployConfig, factory: FakeFactory) -> Orchestrator:
    return Orchestrator(cfg, session_factory=factory, console=Console(quiet=True))


class TestOrchestratorSuccess:
    def test_done(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        factory = FakeFactory()
        orch = _orchestrator(tmp_config, factory)
        result = orch.run(target, artifacts)

        assert result.phase is DeploymentPhase.DONE
        assert result.activation is ActivationState.ACTIVE
        assert orch.history == [
            DeploymentPhase.CONNECTING,
            DeploymentPhase.UPLOADING,
            DeploymentPhase.PROVISIONING,
            DeploymentPhase.DONE,
        ]
        assert factory.closed == 1

    def test_upload_before_provisioning(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        factory = FakeFactory()
        _orchestrator(tmp_config, factory).run(target, artifacts)
        calls = factory.sessions[0].calls
        doc_root = tmp_config.document_root_for("example.com")
        assert calls[0] == ("make_dir", doc_root)
        assert calls[1] == ("upload_tree", ["index.html"], doc_root)
        assert calls[2][0] == "execute"
        assert calls[2][1].startswith("bash -c ")
        assert len(calls) == 3

    def test_sudo_for_non_root_login(self, tmp_config: DeployConfig, artifacts: ArtifactSet):
        factory = FakeFactory()
        target = DeploymentTarget(host="h", user="deploy", domain="example.com")
        _orchestrator(tmp_config, factory).run(target, artifacts)
        assert factory.sessions[0].calls[-1][1].startswith("sudo -n bash -c ")

    def test_follow_ups(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        result = _orchestrator(tmp_config, FakeFactory()).run(target, artifacts)
        assert result.follow_ups == [
            "Point DNS: example.com, www.example.com -> 203.0.113.10",
            "Enable SSL: ssh root@203.0.113.10 'certbot --nginx -d example.com -d www.example.com'",
        ]

    def test_rerun_with_same_inputs(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        factory = FakeFactory()
        first = _orchestrator(tmp_config, factory).run(target, artifacts)
        second = _orchestrator(tmp_config, factory).run(target, artifacts)
        assert first.phase is second.phase is DeploymentPhase.DONE
        assert factory.sessions[0].calls == factory.sessions[1].calls

    def test_single_use(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        orch = _orchestrator(tmp_config, FakeFactory())
        orch.run(target, artifacts)
        with pytest.raises(RuntimeError):
            orch.run(target, artifacts)


class TestOrchestratorFailure:
    def test_empty_artifacts_never_connect(self, tmp_config: DeployConfig, target: DeploymentTarget):
        factory = FakeFactory()
        with pytest.raises(InvalidTargetError):
            _orchestrator(tmp_config, factory).run(target, ArtifactSet())
        assert factory.sessions == []

    def test_connect_failure(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        factory = FakeFactory()
        factory.connect_error = HostConnectionError("no route to host")
        orch = _orchestrator(tmp_config, factory)
        with pytest.raises(HostConnectionError):
            orch.run(target, artifacts)
        assert orch.history == [DeploymentPhase.CONNECTING, DeploymentPhase.FAILED]

    def test_upload_failure_skips_provisioning(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        factory = FakeFactory()
        factory.fail_upload = True
        orch = _orchestrator(tmp_config, factory)
        with pytest.raises(TransferError):
            orch.run(target, artifacts)
        assert orch.phase is DeploymentPhase.FAILED
        assert DeploymentPhase.PROVISIONING not in orch.history
        assert all(call[0] != "execute" for call in factory.sessions[0].calls)
        assert factory.closed == 1

    def test_validation_failure(self, tmp_config: DeployConfig, target: DeploymentTarget, artifacts: ArtifactSet):
        output = "nginx: [emerg] unknown directive\nsitedeploy: configuration test failed; nginx was not reloaded\n"
        factory = FakeFactory(exit_status=int(UnitExit.VALIDATE), output=output)
        orch = _orchestrator(tmp_config, factory)
        with pytest.raises(ConfigValidationError) as info:
            orch.run(target, artifacts)
        assert info.value.output == output
        assert info.value.phase == "validate"
        assert orch.history[-2:] == [DeploymentPhase.PROVISIONING, DeploymentPhase.FAILED]


class TestErrorForExit:
    @pytest.mark.parametrize(
        ("status", "cls"),
        [
            (UnitExit.PACKAGE_INSTALL, PackageInstallError),
            (UnitExit.STAGE, StagingError),
            (UnitExit.ENABLE, StagingError),
            (UnitExit.VALIDATE, ConfigValidationError),
            (UnitExit.RELOAD, ServiceReloadError),
        ],
    )
    def test_known_statuses(self, status: int, cls: type):
        err = error_for_exit(CommandResult(exit_status=int(status), output="boom"))
        assert type(err) is cls
        assert err.output == "boom"

    def test_unknown_status(self):
        err = error_for_exit(CommandResult(exit_status=127, output="bash: not found"))
        assert type(err) is ProvisioningError
        assert "127" in str(err)

    def test_phases(self):
        assert PackageInstallError("x").phase == "provision"
        assert ServiceReloadError("x").phase == "activate"
        assert ServiceReloadError("x").exit_code != ConfigValidationError("x").exit_code
