"""Tests for the logging service."""

import json
import logging
import os
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from screenguess.services.errors import ConfigurationError
from screenguess.services.logging import SECRET_KEYS, LoggingService, setup_logging

# Keys the processors set themselves
RESERVED_KEYS = {"event", "level", "logger", "timestamp", "exception", "exc_info", "stack_info", "positional_args"}


class TestLoggingService:
    """Test cases for LoggingService."""

    def test_development_logging_format(self) -> None:
        """Development logging uses the console renderer, not JSON."""
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="INFO")
                service.configure()

                logger = service.get_logger("test")
                logger.info("test message", key="value")

                output = mock_stdout.getvalue()

        assert "test message" in output
        assert "key=value" in output
        assert not output.strip().startswith("{")

    def test_production_logging_format(self) -> None:
        """Production logging renders one JSON object per event."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("test message", key="value")

                output = mock_stdout.getvalue()

        parsed = json.loads(output.strip().splitlines()[0])
        assert parsed["event"] == "test message"
        assert parsed["key"] == "value"
        assert "timestamp" in parsed
        assert parsed["level"] == "info"

    def test_level_filtering(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="WARNING")
                service.configure()

                logger = service.get_logger("test")
                logger.info("hidden")
                logger.warning("shown")

                output = mock_stdout.getvalue()

        assert "hidden" not in output
        assert "shown" in output

    def test_console_disabled(self, tmp_path: Path) -> None:
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            service = LoggingService(log_level="INFO", log_dir=tmp_path, console=False)
            service.configure()

            service.get_logger("test").info("file only")

            output = mock_stdout.getvalue()

        assert output == ""
        assert "file only" in (tmp_path / "app.log").read_text()

    def test_file_logging_setup(self, tmp_path: Path) -> None:
        """File logging writes JSON to app.log and creates error.log."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="INFO", log_dir=tmp_path, console=False)
            service.configure()

            service.get_logger("test").info("test file message", data="test")

        app_log = tmp_path / "app.log"
        assert app_log.exists()
        assert (tmp_path / "error.log").exists()

        parsed = json.loads(app_log.read_text().strip())
        assert parsed["event"] == "test file message"
        assert parsed["data"] == "test"

    def test_error_file_logging(self, tmp_path: Path) -> None:
        """Errors are also written to error.log."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="DEBUG", log_dir=tmp_path, console=False)
            service.configure()

            logger = service.get_logger("test")
            logger.info("not an error")
            logger.error("test error message", error_code=500)

        content = (tmp_path / "error.log").read_text()
        parsed = json.loads(content.strip())
        assert parsed["event"] == "test error message"
        assert parsed["error_code"] == 500
        assert parsed["level"] == "error"


    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            LoggingService(log_level="VERBOSE")

        assert exc_info.value.setting == "log_level"

    def test_level_is_case_insensitive(self) -> None:
        assert LoggingService(log_level="debug").numeric_level == logging.DEBUG

    def test_secret_values_masked(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("token refreshed", access_token="tok-123", signing_secret="s3cr3t")

                output = mock_stdout.getvalue()

        parsed = json.loads(output.strip().splitlines()[0])
        assert "tok-123" not in output
        assert "s3cr3t" not in output
        assert parsed["access_token"] == "***"
        assert parsed["signing_secret"] == "***"

class TestStructuredLoggingProperties:
    """Property-based tests for structured logging consistency."""

    @given(
        log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
        message=st.text(min_size=1, max_size=200),
        context_data=st.dictionaries(
            keys=st.text(min_size=1, max_size=20).filter(lambda x: x.isidentifier() and x not in RESERVED_KEYS | SECRET_KEYS),
            values=st.one_of(
                st.text(max_size=100),
                st.integers(min_value=-10**9, max_value=10**9),
                st.booleans(),
            ),
            max_size=5,
        ),
    )
    @settings(deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_structured_logging_consistency(
        self,
        log_level: str,
        message: str,
        context_data: dict[str, str | int | bool],
    ) -> None:
        """**Feature: screenguess, Property 11: Structured logging consistency**

        Every event carries its level, timestamp, logger name and the
        key-value context it was logged with.
        """
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="DEBUG")
                service.configure()

                logger = service.get_logger("screenguess.test")
                getattr(logger, log_level.lower())(message, **context_data)

                output = mock_stdout.getvalue()

        parsed = json.loads(output.strip().splitlines()[0])
        assert parsed["event"] == message
        assert parsed["level"] == log_level.lower()
        assert parsed["logger"] == "screenguess.test"
        assert "T" in parsed["timestamp"]
        for key, value in context_data.items():
            assert parsed[key] == value


def test_setup_logging_function(tmp_path: Path) -> None:
    """Test the setup_logging convenience function."""
    with patch.dict(os.environ, {}):
        service = setup_logging(
            log_level="DEBUG",
            log_dir=tmp_path,
            environment="production",
            console=False,
        )

        assert isinstance(service, LoggingService)
        assert os.environ["ENVIRONMENT"] == "production"
        assert service.log_level == "DEBUG"

        service.get_logger("test_setup").info("setup test", component="test")

    parsed = json.loads((tmp_path / "app.log").read_text().strip())
    assert parsed["event"] == "setup test"
