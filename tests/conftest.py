"""Pytest configuration and shared fixtures for EnvBinder tests."""

from typing import Dict

import pytest
from envbinder import AliasRegistry, EnvBinder, reset_default_binder


@pytest.fixture
def environ() -> Dict[str, str]:
    """Create an empty environment mapping for a binder to read."""
    return {}


@pytest.fixture
def env(environ: Dict[str, str]) -> EnvBinder:
    """Create an EnvBinder reading the `environ` fixture."""
    return EnvBinder(environ)


@pytest.fixture
def registry() -> AliasRegistry:
    """Create an empty alias registry."""
    return AliasRegistry()


@pytest.fixture(autouse=True)
def fresh_default_binder():
    """Make sure no test leaks the process-wide binder into another."""
    reset_default_binder()
    yield
    reset_default_binder()
