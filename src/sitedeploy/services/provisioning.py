"""Remote provisioning unit: the whole activation sequence as one shell script.

The unit is rendered locally, shipped in a single ``bash -c`` invocation and
reports back only through its exit status and combined output:

1. install nginx + certbot when nginx is missing
2. stage the rendered config next to the live one and rename it into place
3. swap the sites-enabled link and move the distribution's default site aside
4. ``nginx -t``
5. reload (or start) nginx

A failure in steps 2-4 restores the previous config, link and default site
before the script exits, so nginx is never left pointing at unvalidated files.

Each step exits with its own status (see ``UnitExit``) so the orchestrator
can tell which phase failed.
"""

from __future__ import annotations

import base64
import re
import shlex
from enum import IntEnum

from pydantic import BaseModel, ConfigDict

from sitedeploy_common import ActivationState, DeployConfig, DeploymentTarget

from sitedeploy.services.renderer import get_env, render_site_config


class UnitExit(IntEnum):
    PACKAGE_INSTALL = 10
    STAGE = 11
    ENABLE = 12
    VALIDATE = 13
    RELOAD = 14


_STATE_RE = re.compile(r"^sitedeploy-state: (\w+)\s*$", re.MULTILINE)


class ProvisioningUnit(BaseModel):
    """Everything the remote script needs, fixed before connecting."""

    model_config = ConfigDict(frozen=True)

    site_name: str
    config_text: str
    available_path: str
    enabled_path: str
    default_site_path: str
    packages: tuple[str, ...]
    skip_unchanged_reload: bool = True

    @property
    def encoded_config(self) -> str:
        return base64.b64encode(self.config_text.encode()).decode()

    def to_script(self) -> str:
        template = get_env().get_template("provision.sh.j2")
        return template.render(unit=self, codes=UnitExit, states=ActivationState)

    def command(self, *, sudo: bool = False) -> str:
        """Shell command that runs the script in one round trip."""
        cmd = f"bash -c {shlex.quote(self.to_script())}"
        if sudo:
            cmd = f"sudo -n {cmd}"
        return cmd


def build_unit(target: DeploymentTarget, cfg: DeployConfig) -> ProvisioningUnit:
    """Render the site config for ``target`` and wrap it in a provisioning unit."""
    site = target.site_name
    config_text = render_site_config(
        target,
        document_root=cfg.document_root_for(site),
        upstream=cfg.upstream,
    )
    return ProvisioningUnit(
        site_name=site,
        config_text=config_text,
        available_path=cfg.available_path(site),
        enabled_path=cfg.enabled_path(site),
        default_site_path=cfg.default_site_path,
        packages=cfg.packages,
        skip_unchanged_reload=cfg.skip_unchanged_reload,
    )


def parse_activation_state(output: str) -> ActivationState:
    """Return the last state the unit reported, DISABLED if none."""
    matches = _STATE_RE.findall(output)
    if not matches:
        return ActivationState.DISABLED
    return ActivationState(matches[-1])
