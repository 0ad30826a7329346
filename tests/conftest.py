"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitedeploy_common import ArtifactSet, DeployConfig, DeploymentTarget


@pytest.fixture
def tmp_config(tmp_path: Path) -> DeployConfig:
    """Return a DeployConfig whose remote layout and state live under tmp_path."""
    return DeployConfig(
        document_root=str(tmp_path / "var" / "www" / "site"),
        sites_available_dir=str(tmp_path / "etc" / "nginx" / "sites-available"),
        sites_enabled_dir=str(tmp_path / "etc" / "nginx" / "sites-enabled"),
        state_dir=tmp_path / "state",
    )


@pytest.fixture
def target() -> DeploymentTarget:
    return DeploymentTarget(host="203.0.113.10", domain="example.com", aliases=("www.example.com",))


@pytest.fixture
def artifacts() -> ArtifactSet:
    return ArtifactSet.from_mapping({"index.html": "<h1>hi</h1>"})
