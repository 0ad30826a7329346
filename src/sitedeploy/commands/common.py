"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console

from sitedeploy_common import ArtifactSet, DeploymentTarget

from sitedeploy.errors import InvalidTargetError, SiteDeployError


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "input"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def build_target(
    *,
    host: str,
    domain: str,
    user: str = "root",
    aliases: Optional[list[str]] = None,
    include_www: bool = True,
    port: int = 22,
    identity_file: Optional[Path] = None,
) -> DeploymentTarget:
    """Build a DeploymentTarget from CLI input, rejecting bad domains up front."""
    names = list(aliases or [])
    domain = domain.strip()
    if include_www and domain and not domain.startswith("www."):
        names.insert(0, f"www.{domain}")
    try:
        return DeploymentTarget(
            host=host,
            user=user,
            domain=domain,
            aliases=tuple(names),
            port=port,
            identity_file=str(identity_file) if identity_file else None,
        )
    except ValidationError as exc:
        raise InvalidTargetError(f"Invalid deployment target: {_describe(exc)}") from exc


def load_artifacts(path: Path) -> ArtifactSet:
    try:
        artifacts = ArtifactSet.from_path(path)
    except (OSError, ValidationError) as exc:
        raise InvalidTargetError(f"Cannot load artifacts from {path}: {exc}") from exc
    if not len(artifacts):
        raise InvalidTargetError(f"No files to deploy under {path}")
    return artifacts


def report_failure(console: Console, exc: SiteDeployError) -> None:
    """Print which phase failed, the error and any remote output verbatim."""
    console.print(f"\n[red bold]Failed during {exc.phase}:[/red bold] {exc}", highlight=False)
    if exc.output:
        console.print("[dim]--- remote output ---[/dim]")
        console.print(exc.output.rstrip(), markup=False, highlight=False)
        console.print("[dim]---------------------[/dim]")
