"""Deployment target model."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitedeploy_common.constants import DEFAULT_SSH_PORT, DEFAULT_SSH_USER

_LABEL_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")


def is_valid_hostname(name: str) -> bool:
    """Return True for a non-empty ASCII host name (RFC 1123 labels)."""
    if not name or len(name) > 253 or not name.isascii():
        return False
    return all(_LABEL_RE.match(label) for label in name.rstrip(".").split("."))


class DeploymentTarget(BaseModel):
    """Where and as whom a site is deployed. Immutable for one run."""

    model_config = ConfigDict(frozen=True)

    host: str
    user: str = DEFAULT_SSH_USER
    domain: str
    aliases: tuple[str, ...] = Field(default_factory=tuple)
    port: int = Field(default=DEFAULT_SSH_PORT, ge=1, le=65535)
    identity_file: str | None = None

    @field_validator("host", "user")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        value = value.strip().lower()
        if not is_valid_hostname(value):
            raise ValueError(f"invalid domain name: {value!r}")
        return value

    @field_validator("aliases")
    @classmethod
    def _check_aliases(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = []
        for alias in value:
            alias = alias.strip().lower()
            if not is_valid_hostname(alias):
                raise ValueError(f"invalid alias domain: {alias!r}")
            cleaned.append(alias)
        return tuple(cleaned)

    @property
    def server_names(self) -> list[str]:
        names: list[str] = []
        for name in (self.domain, *self.aliases):
            if name not in names:
                names.append(name)
        return names

    @property
    def site_name(self) -> str:
        return self.domain

    @property
    def address(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"
