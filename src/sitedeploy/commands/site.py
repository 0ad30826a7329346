"""Inspect what a deployment would do and check a deployed site."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from sitedeploy.audit import audit
from sitedeploy.commands.common import build_target, report_failure
from sitedeploy.config import get_config
from sitedeploy.errors import SiteDeployError
from sitedeploy.services import verify as verify_service
from sitedeploy.services.provisioning import build_unit

app = typer.Typer(no_args_is_help=True)
console = Console()


def _unit(domain: str, alias: Optional[list[str]], no_www: bool):
    try:
        target = build_target(host="localhost", domain=domain, aliases=alias, include_www=not no_www)
    except SiteDeployError as exc:
        report_failure(console, exc)
        raise typer.Exit(exc.exit_code)
    return build_unit(target, get_config())


@app.command()
def render(
    domain: str = typer.Option(..., envvar="SITEDEPLOY_DOMAIN", help="Primary domain"),
    alias: Optional[list[str]] = typer.Option(None, "--alias", help="Extra server name (repeatable)"),
    no_www: bool = typer.Option(False, "--no-www", help="Skip www subdomain"),
    raw: bool = typer.Option(False, "--raw", help="Print without highlighting"),
) -> None:
    """Print the nginx config that a deploy would install."""
    unit = _unit(domain, alias, no_www)
    if raw:
        typer.echo(unit.config_text, nl=False)
        return
    console.print(Syntax(unit.config_text, "nginx", theme="monokai"))


@app.command()
def script(
    domain: str = typer.Option(..., envvar="SITEDEPLOY_DOMAIN", help="Primary domain"),
    alias: Optional[list[str]] = typer.Option(None, "--alias", help="Extra server name (repeatable)"),
    no_www: bool = typer.Option(False, "--no-www", help="Skip www subdomain"),
    raw: bool = typer.Option(False, "--raw", help="Print without highlighting"),
) -> None:
    """Print the provisioning script that runs on the host."""
    unit = _unit(domain, alias, no_www)
    if raw:
        typer.echo(unit.to_script(), nl=False)
        return
    console.print(Syntax(unit.to_script(), "bash", theme="monokai"))


@app.command()
def verify(
    host: str = typer.Option(..., envvar="SITEDEPLOY_HOST", help="Target host address"),
    domain: str = typer.Option(..., envvar="SITEDEPLOY_DOMAIN", help="Primary domain"),
) -> None:
    """Check that the host serves / for the domain with the hardened headers."""
    try:
        with audit("verify", target=domain, host=host):
            resp = verify_service.check_site(host, domain)
    except SiteDeployError as exc:
        report_failure(console, exc)
        raise typer.Exit(exc.exit_code)
    console.print(f"[green]OK[/green] http://{host}/ (Host: {domain}) -> {resp.status_code}")
