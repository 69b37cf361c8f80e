"""Shared fixtures for the configuration tests."""

from __future__ import annotations

import pytest

from wmr_server.config.env import (
    WMR_MODULES,
    WMR_TOKEN,
    WMR_WEBSERVER_DEBUG,
    WMR_WEBSERVER_PORT,
    EnvSettings,
)
from wmr_server.logging import reset_logging
from wmr_server.modules import ModuleRegistry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every WMR_* variable so tests start from an empty environment."""
    for name in (WMR_MODULES, WMR_TOKEN, WMR_WEBSERVER_PORT, WMR_WEBSERVER_DEBUG, "WMR_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def env() -> EnvSettings:
    return EnvSettings()


@pytest.fixture
def registry() -> ModuleRegistry:
    return ModuleRegistry({"a": object(), "b": object()})
