"""Root Typer application for the sitedeploy CLI."""

from __future__ import annotations

import typer

from sitedeploy.commands import deploy, history, site

app = typer.Typer(
    name="sitedeploy",
    help="Deploy a static site behind a hardened nginx reverse proxy on a remote host.",
    no_args_is_help=True,
)

app.command(name="deploy")(deploy.deploy)
app.command(name="history")(history.history)
app.add_typer(site.app, name="site", help="Render configs and check deployed sites.")

if __name__ == "__main__":
    app()
