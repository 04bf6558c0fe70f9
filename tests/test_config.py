"""Tests for settings and logging setup."""

import pytest
import structlog

from py_terragen.config import Settings
from py_terragen.utils.logging import configure_logging


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "DEFAULT_WORLD_SIZE", "MAX_WORLD_SIZE", "NOISE_WORKERS"):
            monkeypatch.delenv(f"TERRAGEN_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.default_world_size == 50
        assert settings.max_world_size == 500
        assert settings.noise_workers == 4

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TERRAGEN_MAX_WORLD_SIZE", "42")
        monkeypatch.setenv("TERRAGEN_LOG_FORMAT", "console")
        settings = Settings(_env_file=None)
        assert settings.max_world_size == 42
        assert settings.log_format == "console"


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            configure_logging(fmt="xml")

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configures_structlog(self, fmt):
        configure_logging(level="debug", fmt=fmt)
        try:
            assert structlog.is_configured()
            structlog.get_logger("test").info("Logging configured", fmt=fmt)
        finally:
            structlog.reset_defaults()
