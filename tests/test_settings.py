from pathlib import Path

from asnwho.settings import get_settings, reset_settings_cache


def test_settings_loads_defaults(monkeypatch):
    for var in ["DATA_DIR", "RATE_LIMIT_RETRY_DELAY"]:
        monkeypatch.delenv(var, raising=False)
    reset_settings_cache()
    s = get_settings()
    assert s.data_dir == Path("/data"), "Cache root should default to /data"
    assert s.rate_limit_retry_delay == 10
    assert s.cache_write_strict is True


def test_data_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    reset_settings_cache()
    assert get_settings().data_dir == tmp_path


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_warnings_present_for_risky_configuration(monkeypatch):
    monkeypatch.setenv("DATA_DIR", "relative/cache")
    monkeypatch.setenv("RATE_LIMIT_RETRY_DELAY", "0")
    reset_settings_cache()
    warnings = get_settings().recommended_warnings()
    assert any("relative" in w for w in warnings)
    assert any("RATE_LIMIT_RETRY_DELAY" in w for w in warnings)


def test_no_warnings_for_defaults(monkeypatch):
    for var in ["DATA_DIR", "RATE_LIMIT_RETRY_DELAY"]:
        monkeypatch.delenv(var, raising=False)
    reset_settings_cache()
    assert get_settings().recommended_warnings() == []
