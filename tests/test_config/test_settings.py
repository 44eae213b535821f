"""Tests for tierlink settings."""

from pathlib import Path
from unittest.mock import patch

from tierlink.config.constants import DEFAULT_TIERS_FILE
from tierlink.config.settings import Settings


def test_bundled_document_when_user_file_missing(tmp_path):
    with patch("tierlink.config.settings.CONFIG_FILE", tmp_path / "tiers.json"):
        assert Settings().tiers_path == DEFAULT_TIERS_FILE


def test_user_document_preferred(tmp_path):
    user_file = tmp_path / "tiers.json"
    user_file.write_text("{}", encoding="utf-8")
    with patch("tierlink.config.settings.CONFIG_FILE", user_file):
        assert Settings().tiers_path == user_file


def test_explicit_paths(tmp_path):
    s = Settings(config_file=str(tmp_path / "a.json"), state_file=str(tmp_path / "s.json"))
    assert s.tiers_path == tmp_path / "a.json"
    assert s.state_path == tmp_path / "s.json"


def test_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("TIERLINK_STATE_FILE", str(tmp_path / "env-state.json"))
    assert Settings().state_path == Path(tmp_path / "env-state.json")


def test_bundled_document_is_valid():
    import json

    from tierlink.routing.validator import validate_config

    cfg = validate_config(json.loads(DEFAULT_TIERS_FILE.read_text(encoding="utf-8")))
    assert cfg.active_preset in cfg.presets
    assert cfg.default_tier in cfg.presets[cfg.active_preset]


def test_log_level_normalized():
    assert Settings(log_level=" debug ").log_level == "DEBUG"


def test_unknown_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("TIERLINK_LOG_LEVEL", "loud")
    assert Settings().log_level == "WARNING"
