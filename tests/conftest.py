"""Shared test fixtures and configuration."""

import pytest

from asnwho import cache as cache_module
from asnwho.settings import reset_settings_cache
from tests.utils import DummyCache


@pytest.fixture(autouse=True)
def isolated_bootstrap_cache(monkeypatch):
    """Give every test its own bootstrap cache."""

    dummy_cache = DummyCache()
    monkeypatch.setattr(cache_module, "bootstrap_cache", dummy_cache)
    yield dummy_cache


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()
