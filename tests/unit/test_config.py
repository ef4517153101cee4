"""
Unit tests for configuration and logging setup.
"""

import logging

import json_log_formatter
import pytest
from pydantic import ValidationError

from semdag import Settings, get_settings, setup_logging


@pytest.fixture
def package_logger():
    """Restore the 'semdag' logger after a test configures it."""
    logger = logging.getLogger("semdag")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    logger.setLevel(saved[0])
    logger.handlers = saved[1]
    logger.propagate = saved[2]


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Defaults need no environment."""
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.log_format == "text"
        assert settings.validate_input is True
        assert settings.validate_output is True

    def test_from_env(self, monkeypatch):
        """Environment variables use the SEMDAG_ prefix."""
        monkeypatch.setenv("SEMDAG_LOG_LEVEL", "debug")
        monkeypatch.setenv("SEMDAG_LOG_FORMAT", "json")
        monkeypatch.setenv("SEMDAG_VALIDATE_OUTPUT", "false")

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.validate_output is False

    def test_get_settings_is_cached(self, monkeypatch):
        """Settings are read once until the cache is cleared."""
        first = get_settings()
        monkeypatch.setenv("SEMDAG_LOG_LEVEL", "ERROR")

        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().log_level == "ERROR"

    def test_unknown_log_level(self):
        """Unknown levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="loud")

    def test_unknown_log_format(self):
        """Only text and json formats exist."""
        with pytest.raises(ValidationError):
            Settings(log_format="xml")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_text_format(self, package_logger):
        """Text format uses a plain formatter."""
        logger = setup_logging(Settings(log_level="INFO"))

        assert logger is package_logger
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, json_log_formatter.JSONFormatter)

    def test_json_format(self, package_logger):
        """JSON format uses json_log_formatter."""
        logger = setup_logging(Settings(log_format="json"))

        assert isinstance(logger.handlers[0].formatter, json_log_formatter.JSONFormatter)

    def test_root_logger_untouched(self, package_logger):
        """Only the package logger is configured."""
        root_handlers = list(logging.getLogger().handlers)
        setup_logging(Settings())
        assert logging.getLogger().handlers == root_handlers

    def test_defaults_from_environment(self, monkeypatch, package_logger):
        """Without arguments the cached settings are used."""
        monkeypatch.setenv("SEMDAG_LOG_LEVEL", "DEBUG")
        logger = setup_logging()
        assert logger.level == logging.DEBUG
