"""Tests for environment overrides of the runtime defaults."""

from rms import config


class TestResolveConfig:
    def test_defaults_without_environment(self, monkeypatch):
        monkeypatch.delenv("RMS_SNAPSHOT_PATH", raising=False)
        monkeypatch.delenv("RMS_LOG_LEVEL", raising=False)
        assert config.resolve_snapshot_path() == config.SNAPSHOT_PATH
        assert config.resolve_log_level() == config.LOG_LEVEL

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RMS_SNAPSHOT_PATH", "/tmp/elsewhere.db")
        monkeypatch.setenv("RMS_LOG_LEVEL", "debug")
        assert config.resolve_snapshot_path() == "/tmp/elsewhere.db"
        assert config.resolve_log_level() == "DEBUG"

    def test_blank_environment_falls_back(self, monkeypatch):
        monkeypatch.setenv("RMS_SNAPSHOT_PATH", "   ")
        assert config.resolve_snapshot_path() == config.SNAPSHOT_PATH
