"""Jinja2-based nginx site config renderer."""

from __future__ import annotations

import shlex
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from sitedeploy_common import (
    API_PREFIX,
    DEFAULT_UPSTREAM,
    GZIP_MIN_LENGTH,
    GZIP_TYPES,
    LISTEN_PORT,
    SECURITY_HEADERS,
    STATIC_ASSET_CACHE_CONTROL,
    STATIC_ASSET_EXPIRES,
    STATIC_ASSET_EXTENSIONS,
    DeploymentTarget,
)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["shquote"] = lambda value: shlex.quote(str(value))
    return env


def render_site_config(
    target: DeploymentTarget,
    *,
    document_root: str,
    upstream: str = DEFAULT_UPSTREAM,
) -> str:
    """Render the nginx server block for a static site.

    Pure and deterministic: identical inputs give byte-identical output.
    Domain syntax is checked by DeploymentTarget, not here.
    """
    template = get_env().get_template("site.conf.j2")
    return template.render(
        site_name=target.site_name,
        listen_port=LISTEN_PORT,
        server_names=target.server_names,
        document_root=document_root,
        security_headers=SECURITY_HEADERS,
        gzip_types=GZIP_TYPES,
        gzip_min_length=GZIP_MIN_LENGTH,
        asset_extensions=STATIC_ASSET_EXTENSIONS,
        asset_expires=STATIC_ASSET_EXPIRES,
        asset_cache_control=STATIC_ASSET_CACHE_CONTROL,
        api_prefix=API_PREFIX,
        upstream=upstream,
    )
