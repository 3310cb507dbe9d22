"""Tests for configuration loading."""

import json
import logging

from reclaim.config import config_path, load_config
from reclaim.models import AnalysisConfig


class TestConfigPath:
    def test_uses_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert config_path() == tmp_path / "reclaim" / "config.json"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == AnalysisConfig()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"min_size_mb": 50, "stale_days": 30}))

        config = load_config(path)
        assert config.min_size_mb == 50
        assert config.stale_days == 30
        assert config.max_large_files == 10

    def test_default_location(self, isolate_config):
        isolate_config.parent.mkdir(parents=True)
        isolate_config.write_text(json.dumps({"max_large_files": 3}))
        assert load_config().max_large_files == 3

    def test_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"stale_days": 7, "colour": "blue"}))
        assert load_config(path).stale_days == 7

    def test_malformed_json_warns_and_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="reclaim.config"):
            config = load_config(path)

        assert config == AnalysisConfig()
        assert "Could not load config" in caplog.text

    def test_invalid_values_warn_and_default(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"min_size_mb": -5}))

        with caplog.at_level(logging.WARNING, logger="reclaim.config"):
            config = load_config(path)

        assert config == AnalysisConfig()
        assert "Invalid values" in caplog.text

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2, 3]")
        assert load_config(path) == AnalysisConfig()

    def test_overrides_take_precedence(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"min_size_mb": 50, "stale_days": 30}))

        config = load_config(path, min_size_mb=5, stale_days=None)
        assert config.min_size_mb == 5
        assert config.stale_days == 30
