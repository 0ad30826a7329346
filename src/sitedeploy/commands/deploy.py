"""Deploy a static site behind nginx on a remote host."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sitedeploy.audit import audit
from sitedeploy.commands.common import build_target, load_artifacts, report_failure
from sitedeploy.config import get_config
from sitedeploy.errors import SiteDeployError
from sitedeploy.services import verify as verify_service
from sitedeploy.services.orchestrator import Orchestrator

console = Console()


def deploy(
    host: str = typer.Option(..., envvar="SITEDEPLOY_HOST", help="Target host address"),
    domain: str = typer.Option(..., envvar="SITEDEPLOY_DOMAIN", help="Primary domain (e.g., example.com)"),
    artifacts: Path = typer.Option(
        ..., "--artifacts", "-a", envvar="SITEDEPLOY_ARTIFACTS", help="File or directory to upload"
    ),
    user: str = typer.Option("root", envvar="SITEDEPLOY_USER", help="SSH login"),
    alias: Optional[list[str]] = typer.Option(None, "--alias", help="Extra server name (repeatable)"),
    no_www: bool = typer.Option(False, "--no-www", help="Skip www subdomain"),
    port: int = typer.Option(22, envvar="SITEDEPLOY_SSH_PORT", help="SSH port"),
    identity_file: Optional[Path] = typer.Option(
        None, "--identity-file", "-i", envvar="SITEDEPLOY_IDENTITY_FILE", help="SSH private key"
    ),
    verify: bool = typer.Option(False, "--verify", help="Request / from the host after deploying"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the remote output on success"),
) -> None:
    """Upload the artifacts and provision nginx for the site."""
    cfg = get_config()

    try:
        target = build_target(
            host=host,
            domain=domain,
            user=user,
            aliases=alias,
            include_www=not no_www,
            port=port,
            identity_file=identity_file,
        )
        artifact_set = load_artifacts(artifacts)
    except SiteDeployError as exc:
        report_failure(console, exc)
        raise typer.Exit(exc.exit_code)

    console.print(f"[bold]Deploying {target.domain} to {target.host}[/bold]")
    try:
        with audit(
            "deploy",
            target=target.domain,
            host=target.host,
            user=target.user,
            server_names=target.server_names,
            files=len(artifact_set),
            bytes=artifact_set.total_bytes,
        ) as event:
            result = Orchestrator(cfg, console=console).run(target, artifact_set)
            event.params["activation"] = result.activation.value
    except SiteDeployError as exc:
        report_failure(console, exc)
        raise typer.Exit(exc.exit_code)

    if verbose:
        console.print(result.output.rstrip(), markup=False, highlight=False)

    console.print(f"\n[green bold]Deployment complete![/green bold] http://{target.domain}/ ({result.activation.value})")
    console.print("\nNext steps:")
    for i, step in enumerate(result.follow_ups, start=1):
        console.print(f"  {i}. {step}", markup=False, highlight=False)

    if verify:
        console.print(f"\nVerifying http://{target.host}/ (Host: {target.domain})")
        try:
            with audit("verify", target=target.domain, host=target.host):
                verify_service.check_site(target.host, target.domain)
        except SiteDeployError as exc:
            report_failure(console, exc)
            console.print(f"[yellow]{target.domain} was activated; only the post-deploy check failed.[/yellow]")
            raise typer.Exit(exc.exit_code)
        console.print("[green]Site responds with the expected headers.[/green]")
