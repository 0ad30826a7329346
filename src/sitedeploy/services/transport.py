"""SSH transport: one Fabric connection per deployment."""

from __future__ import annotations

import io
import shlex
import tarfile
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from fabric import Connection
from invoke.exceptions import CommandTimedOut
from paramiko.ssh_exception import AuthenticationException, SSHException

from sitedeploy_common import ArtifactSet, DeployConfig, DeploymentTarget

from sitedeploy.errors import AuthenticationError, HostConnectionError, TransferError


@dataclass(frozen=True)
class CommandResult:
    exit_status: int
    output: str

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


def build_archive(artifacts: ArtifactSet) -> io.BytesIO:
    """Pack the artifact set into an in-memory tar.gz, in set order."""
    stream = io.BytesIO()
    mtime = int(time.time())
    with tarfile.open(fileobj=stream, mode="w:gz") as tar:
        for artifact in artifacts:
            info = tarfile.TarInfo(name=artifact.path)
            info.size = len(artifact.content)
            info.mode = 0o644
            info.mtime = mtime
            tar.addfile(info, io.BytesIO(artifact.content))
    stream.seek(0)
    return stream


class Session:
    """A live SSH session to the target host.

    All remote calls are blocking and never retried. Commands that touch
    root-owned paths go through ``privileged`` so non-root logins use sudo.
    """

    def __init__(self, conn: Connection, target: DeploymentTarget, cfg: DeployConfig):
        self._conn = conn
        self.target = target
        self._cfg = cfg

    @property
    def needs_sudo(self) -> bool:
        return self.target.user != "root"

    def privileged(self, command: str) -> str:
        return f"sudo -n {command}" if self.needs_sudo else command

    def execute(self, command: str) -> CommandResult:
        """Run ``command`` and return its exit status and stdout+stderr."""
        try:
            result = self._conn.run(
                command,
                hide=True,
                warn=True,
                in_stream=False,
                timeout=self._cfg.command_timeout,
            )
        except CommandTimedOut as exc:
            raise HostConnectionError(
                f"Remote command timed out after {self._cfg.command_timeout}s on {self.target.host}"
            ) from exc
        except (SSHException, OSError) as exc:
            raise HostConnectionError(f"Lost connection to {self.target.host}: {exc}") from exc
        return CommandResult(exit_status=result.exited, output=result.stdout + result.stderr)

    def make_dir(self, path: str) -> None:
        result = self.execute(self.privileged(f"mkdir -p {shlex.quote(path)}"))
        if not result.ok:
            raise TransferError(f"Could not create {path} on {self.target.host}", output=result.output)

    def upload_tree(self, artifacts: ArtifactSet, remote_dir: str) -> None:
        """Upload the artifact set as one archive and unpack it under ``remote_dir``."""
        archive = build_archive(artifacts)
        remote_archive = f"/tmp/sitedeploy-{uuid.uuid4().hex}.tar.gz"
        try:
            self._conn.put(archive, remote=remote_archive)
        except (SSHException, OSError) as exc:
            raise TransferError(f"Upload to {self.target.host}:{remote_archive} failed: {exc}") from exc

        archive_q = shlex.quote(remote_archive)
        extract = self.privileged(f"tar --no-same-owner -xzf {archive_q} -C {shlex.quote(remote_dir)}")
        result = self.execute(f"{extract}; status=$?; rm -f {archive_q}; exit $status")
        if not result.ok:
            raise TransferError(f"Unpacking artifacts into {remote_dir} failed", output=result.output)


@contextmanager
def open_session(target: DeploymentTarget, cfg: DeployConfig) -> Iterator[Session]:
    """Connect to ``target``; the connection is closed on every exit path."""
    connect_kwargs: dict[str, object] = {}
    if target.identity_file:
        connect_kwargs["key_filename"] = target.identity_file
    conn = Connection(
        target.host,
        user=target.user,
        port=target.port,
        connect_timeout=cfg.connect_timeout,
        connect_kwargs=connect_kwargs,
    )
    try:
        try:
            conn.open()
        except AuthenticationException as exc:
            raise AuthenticationError(f"Authentication failed for {target.address}: {exc}") from exc
        except (SSHException, OSError) as exc:
            raise HostConnectionError(f"Could not connect to {target.address}: {exc}") from exc
        yield Session(conn, target, cfg)
    finally:
        conn.close()
