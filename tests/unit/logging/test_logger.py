"""Tests for log handler installation."""

import io
import logging
import warnings

import pytest

from lambda_runtime.exceptions.startup_errors import ConfigurationError
from lambda_runtime.logging.config import LogFormat, LoggingConfig, LogLevel
from lambda_runtime.logging.formatters import JSONFormatter, TextFormatter
from lambda_runtime.logging.logger import reset_logging, setup_logging


class TestSetupLogging:
    def setup_method(self):
        reset_logging()

    def teardown_method(self):
        reset_logging()

    def test_installs_handler_on_root(self):
        handler = setup_logging(stream=io.StringIO())
        assert handler in logging.getLogger().handlers

    def test_json_format_by_default(self):
        stream = io.StringIO()
        handler = setup_logging(stream=stream)
        assert isinstance(handler.formatter, JSONFormatter)

        logging.getLogger("test").info("test message")

        assert stream.getvalue().startswith("{")

    def test_text_format(self):
        stream = io.StringIO()
        handler = setup_logging(config=LoggingConfig(log_format=LogFormat.TEXT), stream=stream)
        assert isinstance(handler.formatter, TextFormatter)

        logging.getLogger("test").info("test message")

        output = stream.getvalue()
        assert "| test message" in output
        assert "\033[" not in output

    def test_replaces_only_its_own_handler(self):
        other = logging.NullHandler()
        logging.getLogger().addHandler(other)
        try:
            first = setup_logging(stream=io.StringIO())
            second = setup_logging(stream=io.StringIO())

            handlers = logging.getLogger().handlers
            assert first not in handlers
            assert second in handlers
            assert other in handlers
        finally:
            logging.getLogger().removeHandler(other)

    def test_respects_log_level(self):
        setup_logging(config=LoggingConfig(log_level=LogLevel.ERROR), stream=io.StringIO())
        assert logging.getLogger().level == logging.ERROR

    def test_quiets_urllib3(self):
        setup_logging(config=LoggingConfig(log_level=LogLevel.DEBUG), stream=io.StringIO())
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_warnings_routed_to_log_stream(self):
        stream = io.StringIO()
        setup_logging(stream=stream)

        with warnings.catch_warnings():
            warnings.simplefilter("always")
            warnings.warn("deprecated call", DeprecationWarning, stacklevel=1)

        assert "deprecated call" in stream.getvalue()

    def test_invalid_environment_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        with pytest.raises(ConfigurationError):
            setup_logging()


class TestResetLogging:
    def test_removes_installed_handler(self):
        handler = setup_logging(stream=io.StringIO())

        reset_logging()

        assert handler not in logging.getLogger().handlers
