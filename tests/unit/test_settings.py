"""
Unit tests for toolkit settings and logging configuration.
"""

import pytest
from pydantic import ValidationError

from neo_toolkit.config.constants import SizeLimits
from neo_toolkit.config.logging_config import FORMAT_STRINGS, LogFormat, LoggingConfig, get_logger


class TestToolkitSettings:
    """Test defaults, limits and environment loading."""

    def test_defaults(self, make_settings):
        """Test default limits and policies."""
        settings = make_settings()
        assert settings.max_upload_bytes is None
        assert settings.upload_limit == SizeLimits.GIB
        assert settings.json_limit == SizeLimits.MIB
        assert settings.allowed_content_types == set()
        assert settings.rename_token_length == 25
        assert settings.allow_unknown_json_fields is False
        assert settings.strict_json_types is True

    def test_json_limit_prefers_json_ceiling(self, make_settings):
        """Test the JSON ceiling wins over the upload ceiling."""
        settings = make_settings(max_upload_bytes=1000, max_json_bytes=10)
        assert settings.json_limit == 10
        assert settings.upload_limit == 1000

    def test_json_limit_falls_back_to_upload_ceiling(self, make_settings):
        """Test an explicit upload ceiling bounds JSON bodies too."""
        assert make_settings(max_upload_bytes=1000).json_limit == 1000

    def test_allowed_types_normalized(self, make_settings):
        """Test allow-list entries are lower-cased and stripped."""
        settings = make_settings(allowed_content_types={" Image/PNG ", "image/jpeg", ""})
        assert settings.allowed_content_types == {"image/png", "image/jpeg"}

    def test_frozen(self, make_settings):
        """Test settings cannot change after construction."""
        settings = make_settings()
        with pytest.raises(ValidationError):
            settings.max_upload_bytes = 5

    def test_non_positive_limit_rejected(self, make_settings):
        """Test ceilings must be positive."""
        with pytest.raises(ValidationError):
            make_settings(max_upload_bytes=0)

    def test_environment(self, monkeypatch, make_settings):
        """Test values are read from TOOLKIT_ variables."""
        monkeypatch.setenv("TOOLKIT_MAX_JSON_BYTES", "2048")
        monkeypatch.setenv("TOOLKIT_ALLOWED_CONTENT_TYPES", '["Image/PNG", "image/gif"]')
        monkeypatch.setenv("TOOLKIT_ALLOW_UNKNOWN_JSON_FIELDS", "true")

        settings = make_settings()

        assert settings.json_limit == 2048
        assert settings.allowed_content_types == {"image/png", "image/gif"}
        assert settings.allow_unknown_json_fields is True


class TestLoggingConfig:
    """Test the logging dictConfig built from the environment."""

    def test_default_level(self, monkeypatch):
        """Test the normal verbosity logs warnings and above."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_VERBOSITY", raising=False)
        config = LoggingConfig.build_config()
        assert config["root"]["level"] == "WARNING"

    def test_log_level_overrides_verbosity(self, monkeypatch):
        """Test LOG_LEVEL wins over LOG_VERBOSITY."""
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LoggingConfig.build_config()["root"]["level"] == "DEBUG"

    def test_verbose_mode(self, monkeypatch):
        """Test the verbose mode logs info."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_VERBOSITY", "VERBOSE")
        assert LoggingConfig.build_config()["root"]["level"] == "INFO"

    def test_json_format(self, monkeypatch):
        """Test the JSON log format is selectable."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        config = LoggingConfig.build_config()
        assert config["formatters"]["default"]["format"] == FORMAT_STRINGS[LogFormat.JSON]

    def test_noisy_libraries_quieted(self, monkeypatch):
        """Test HTTP and multipart libraries only log errors."""
        config = LoggingConfig.build_config()
        assert config["loggers"]["httpx"]["level"] == "ERROR"
        assert config["loggers"]["python_multipart"]["level"] == "ERROR"

    def test_upload_logging_switch(self, monkeypatch):
        """Test per-part upload logging is opt-in."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_VERBOSITY", "VERBOSE")
        monkeypatch.delenv("ENABLE_UPLOAD_LOGGING", raising=False)
        assert LoggingConfig.build_config()["loggers"]["neo_toolkit.files"]["level"] == "WARNING"

        monkeypatch.setenv("ENABLE_UPLOAD_LOGGING", "true")
        assert "neo_toolkit.files" not in LoggingConfig.build_config()["loggers"]

    def test_get_logger(self):
        """Test loggers are looked up by module name."""
        assert get_logger("neo_toolkit.files.uploader").name == "neo_toolkit.files.uploader"
