"""Tests for config loading - defaults, YAML merge, env overrides."""

from __future__ import annotations

from pathlib import Path

from alpharadar.config import CONFIG_DIR, DEFAULT_CONFIG, default_config, load_radar_config


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("ALPHARADAR_HOST", raising=False)
    monkeypatch.delenv("ALPHARADAR_PORT", raising=False)
    assert load_radar_config(tmp_path / "absent.yaml") == DEFAULT_CONFIG


def test_yaml_deep_merges_over_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("ALPHARADAR_PORT", raising=False)
    path = tmp_path / "radar.yaml"
    path.write_text("scoring:\n  weights:\n    smart_wallet: 0.5\n  alert_threshold: 75\n")

    config = load_radar_config(path)

    assert config["scoring"]["weights"]["smart_wallet"] == 0.5
    assert config["scoring"]["weights"]["launch_momentum"] == 0.30
    assert config["scoring"]["alert_threshold"] == 75
    assert config["radar"]["fanout_limit"] == 8


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("ALPHARADAR_HOST", "127.0.0.1")
    monkeypatch.setenv("ALPHARADAR_PORT", "9100")
    config = load_radar_config(tmp_path / "absent.yaml")
    assert config["server"] == {"host": "127.0.0.1", "port": 9100}


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("radar:\n  max_tokens: 4\n")
    monkeypatch.setenv("ALPHARADAR_CONFIG", str(path))
    assert load_radar_config()["radar"]["max_tokens"] == 4


def test_shipped_yaml_matches_defaults(monkeypatch):
    monkeypatch.delenv("ALPHARADAR_HOST", raising=False)
    monkeypatch.delenv("ALPHARADAR_PORT", raising=False)
    assert load_radar_config(Path(CONFIG_DIR) / "radar.yaml") == DEFAULT_CONFIG


def test_default_config_is_a_copy():
    config = default_config()
    config["radar"]["max_tokens"] = 1
    assert DEFAULT_CONFIG["radar"]["max_tokens"] == 10
