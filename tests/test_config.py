import json

from app.config import Settings, load_settings


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("TYPEFORGE_DB", raising=False)
    monkeypatch.delenv("TYPEFORGE_TICK_MS", raising=False)
    assert load_settings(tmp_path / "missing.json") == Settings()


def test_file_overlay(tmp_path, monkeypatch):
    monkeypatch.delenv("TYPEFORGE_DB", raising=False)
    monkeypatch.delenv("TYPEFORGE_TICK_MS", raising=False)
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"tick_ms": "250", "unknown": 1, "history_limit": "x"}))
    s = load_settings(path)
    assert s.tick_ms == 250
    assert s.history_limit == Settings.history_limit


def test_malformed_file(tmp_path, monkeypatch):
    monkeypatch.delenv("TYPEFORGE_DB", raising=False)
    monkeypatch.delenv("TYPEFORGE_TICK_MS", raising=False)
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(path) == Settings()


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TYPEFORGE_DB", str(tmp_path / "x.db"))
    monkeypatch.setenv("TYPEFORGE_TICK_MS", "50")
    s = load_settings(tmp_path / "missing.json")
    assert s.db_path == str(tmp_path / "x.db")
    assert s.tick_ms == 50


def test_non_positive_tick(tmp_path, monkeypatch):
    monkeypatch.delenv("TYPEFORGE_DB", raising=False)
    monkeypatch.setenv("TYPEFORGE_TICK_MS", "0")
    assert load_settings(tmp_path / "missing.json").tick_ms == Settings.tick_ms
