"""Central configuration for sitedeploy."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from sitedeploy_common.constants import (
    AUDIT_DB_NAME,
    AUDIT_JSONL_NAME,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_UPSTREAM,
    DOCUMENT_ROOT_PATTERN,
    NGINX_DEFAULT_SITE,
    NGINX_SITES_AVAILABLE,
    NGINX_SITES_ENABLED,
    REMOTE_PACKAGES,
    STATE_DIR,
)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


def _default_state_dir() -> Path:
    env = os.environ.get("SITEDEPLOY_STATE_DIR")
    return Path(env) if env else STATE_DIR


class DeployConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    document_root: str | None = Field(default_factory=lambda: os.environ.get("SITEDEPLOY_DOCUMENT_ROOT") or None)
    upstream: str = Field(default_factory=lambda: os.environ.get("SITEDEPLOY_UPSTREAM", DEFAULT_UPSTREAM))
    sites_available_dir: str = NGINX_SITES_AVAILABLE
    sites_enabled_dir: str = NGINX_SITES_ENABLED
    default_site: str = NGINX_DEFAULT_SITE
    packages: tuple[str, ...] = REMOTE_PACKAGES
    skip_unchanged_reload: bool = True
    connect_timeout: int = Field(
        default_factory=lambda: _env_int("SITEDEPLOY_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT)
    )
    command_timeout: int = Field(
        default_factory=lambda: _env_int("SITEDEPLOY_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT)
    )
    state_dir: Path = Field(default_factory=_default_state_dir)

    def document_root_for(self, site_name: str) -> str:
        if self.document_root:
            return self.document_root
        return DOCUMENT_ROOT_PATTERN.format(site=site_name)

    def available_path(self, site_name: str) -> str:
        return f"{self.sites_available_dir}/{site_name}"

    def enabled_path(self, site_name: str) -> str:
        return f"{self.sites_enabled_dir}/{site_name}"

    @property
    def default_site_path(self) -> str:
        return f"{self.sites_enabled_dir}/{self.default_site}"

    @property
    def audit_jsonl_path(self) -> Path:
        return self.state_dir / AUDIT_JSONL_NAME

    @property
    def audit_db_path(self) -> Path:
        return self.state_dir / AUDIT_DB_NAME
