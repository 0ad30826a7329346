"""Manual follow-up steps printed after a successful deployment."""

from __future__ import annotations

from sitedeploy_common import DeploymentTarget


def certbot_command(target: DeploymentTarget) -> str:
    """certbot invocation that adds TLS to the deployed site."""
    domains = " ".join(f"-d {name}" for name in target.server_names)
    return f"certbot --nginx {domains}"


def follow_up_steps(target: DeploymentTarget) -> list[str]:
    """DNS first, then certificates: issuance needs DNS to resolve to the host."""
    names = ", ".join(target.server_names)
    return [
        f"Point DNS: {names} -> {target.host}",
        f"Enable SSL: ssh {target.user}@{target.host} '{certbot_command(target)}'",
    ]
