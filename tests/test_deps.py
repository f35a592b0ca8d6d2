"""Unit tests for helper functions in :mod:`asnwho.deps`."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from asnwho import deps


def make_request(registry_client=None):
    state = SimpleNamespace()
    if registry_client is not None:
        state.registry_client = registry_client
    return SimpleNamespace(app=SimpleNamespace(state=state))


def test_get_lookup_service_uses_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RATE_LIMIT_RETRY_DELAY", "2.5")
    monkeypatch.setenv("CACHE_WRITE_STRICT", "false")
    registry = object()

    service = deps.get_lookup_service(make_request(registry))

    assert service.client is registry
    assert service.cache.root == Path(tmp_path)
    assert service.retry_delay == 2.5
    assert service.strict_cache_writes is False


def test_get_registry_client_requires_startup():
    with pytest.raises(RuntimeError):
        deps.get_registry_client(make_request())
