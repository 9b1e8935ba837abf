"""Shared pytest fixtures for the microfed test suite.

Provides reusable fixtures for:
- Validated host/remote configurations (standalone and monorepo)
- Remote reference lists
- A shared template renderer
- Settings pointing at a temporary output directory
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from microfed.config import ProjectConfiguration, RemoteReference, Settings, build_configuration
from microfed.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def host_config() -> ProjectConfiguration:
    """React + TypeScript standalone host on port 3000."""
    return build_configuration(role="host", name="shell-app", port=3000)


@pytest.fixture
def remote_config() -> ProjectConfiguration:
    """React + TypeScript standalone remote on port 3001."""
    return build_configuration(role="remote", name="my-remote-app", port=3001)


@pytest.fixture
def vue_host_config() -> ProjectConfiguration:
    return build_configuration(role="host", name="vue-shell", port=3000, framework="vue")


@pytest.fixture
def js_remote_config() -> ProjectConfiguration:
    """Plain JavaScript react remote."""
    return build_configuration(role="remote", name="catalog", port=3002, typescript=False)


@pytest.fixture
def monorepo_host_config() -> ProjectConfiguration:
    """TypeScript host inside a turborepo workspace managed with pnpm."""
    return build_configuration(
        role="host",
        name="shop",
        port=3000,
        is_monorepo=True,
        monorepo_tool="turborepo",
        package_manager="pnpm",
    )


@pytest.fixture
def make_config():
    """Factory building a configuration from keyword overrides.

    Usage::

        def test_something(make_config):
            config = make_config(role="remote", framework="vue")
    """

    def factory(**overrides: Any) -> ProjectConfiguration:
        values: dict[str, Any] = {"role": "host", "name": "app", "port": 3000}
        values.update(overrides)
        return build_configuration(**values)

    return factory


# ---------------------------------------------------------------------------
# Remotes
# ---------------------------------------------------------------------------


@pytest.fixture
def two_remotes() -> list[RemoteReference]:
    return [
        RemoteReference(name="products", url="http://localhost:3001/remoteEntry.js"),
        RemoteReference(name="cart_app", url="http://localhost:3002/remoteEntry.js"),
    ]


# ---------------------------------------------------------------------------
# Rendering & output
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings writing into a fresh temporary directory."""
    return Settings(output_dir=tmp_path)

