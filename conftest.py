"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from protected_mox.reflection import registry_for

pytest_plugins = ("protected_mox.pytest_plugin",)


@pytest.fixture(autouse=True)
def _fresh_member_registries() -> t.Iterator[None]:
    """Drop cached member registries once each test finishes."""
    yield
    registry_for.cache_clear()
