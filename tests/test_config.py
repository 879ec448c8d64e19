"""Tests for settings loading."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from testclient_auth.config import FactoryConfig, LoggingConfig, get_settings, reload_settings


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, env_clean):
        settings = get_settings()

        assert settings.factory.base_url == "http://testserver"
        assert settings.factory.raise_server_exceptions is True
        assert settings.factory.follow_redirects is True
        assert settings.logging.level == "INFO"
        assert settings.logging.json_format is False
        assert settings.logging.file is None

    def test_get_settings_is_singleton(self, env_clean):
        assert get_settings() is get_settings()

    def test_factory_env_overrides(self):
        env = {
            "TESTCLIENT_BASE_URL": "http://app.local",
            "TESTCLIENT_RAISE_SERVER_EXCEPTIONS": "false",
            "TESTCLIENT_FOLLOW_REDIRECTS": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = reload_settings()

            assert settings.factory.base_url == "http://app.local"
            assert settings.factory.raise_server_exceptions is False
            assert settings.factory.follow_redirects is False
        reload_settings()

    def test_logging_env_overrides(self):
        env = {
            "TESTCLIENT_LOG_LEVEL": "DEBUG",
            "TESTCLIENT_LOG_JSON_FORMAT": "true",
            "TESTCLIENT_LOG_FILE": "/tmp/testclient.log",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = reload_settings()

            assert settings.logging.level == "DEBUG"
            assert settings.logging.json_format is True
            assert settings.logging.file == "/tmp/testclient.log"
        reload_settings()

    def test_reload_replaces_instance(self, env_clean):
        before = get_settings()

        after = reload_settings()

        assert after is not before
        assert get_settings() is after

    def test_invalid_log_level(self):
        with patch.dict(os.environ, {"TESTCLIENT_LOG_LEVEL": "LOUD"}, clear=True):
            with pytest.raises(ValidationError):
                LoggingConfig()

    @pytest.mark.parametrize("value", ["info", "Debug", " warning "])
    def test_log_level_case_insensitive(self, value):
        with patch.dict(os.environ, {"TESTCLIENT_LOG_LEVEL": value}, clear=True):
            config = LoggingConfig()

        assert config.level == value.strip().upper()

    def test_host_log_variables_ignored(self):
        """Generic LOG_* variables belong to the host project."""
        env = {"LOG_LEVEL": "verbose", "LOG_FILE": "/var/log/host.log", "LOG_JSON_FORMAT": "yes please"}
        with patch.dict(os.environ, env, clear=True):
            settings = reload_settings()

            assert settings.logging.level == "INFO"
            assert settings.logging.file is None
            assert settings.logging.json_format is False
        reload_settings()

    def test_rotation_count_bounds(self):
        with pytest.raises(ValidationError):
            LoggingConfig(rotation_count=0)

    def test_direct_construction(self, env_clean):
        config = FactoryConfig(base_url="http://other", follow_redirects=False)

        assert config.base_url == "http://other"
        assert config.follow_redirects is False
        assert config.raise_server_exceptions is True
