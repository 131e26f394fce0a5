"""Tests for the logging service."""

import json
import logging
import os
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from freestuff.services.logging import LoggingService, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    structlog.reset_defaults()


class TestLoggingService:
    """Test cases for LoggingService."""

    def test_development_logging_format(self) -> None:
        """Development logging is human readable, not JSON."""
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("test message", key="value")
                output = mock_stderr.getvalue()

        assert "test message" in output
        assert "key" in output
        assert not output.strip().startswith("{")

    def test_production_logging_format(self) -> None:
        """Production logging emits one JSON object per event."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="INFO")
                service.configure()

                service.get_logger("test").info("test message", key="value")
                output = mock_stderr.getvalue()

        lines = [line for line in output.strip().split('\n') if line.strip()]
        parsed = json.loads(lines[0])
        assert parsed["event"] == "test message"
        assert parsed["key"] == "value"
        assert "timestamp" in parsed
        assert parsed["level"] == "info"

    def test_level_filtering(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
                service = LoggingService(log_level="WARNING")
                service.configure()

                logger = service.get_logger("test")
                logger.info("hidden")
                logger.warning("shown")
                output = mock_stderr.getvalue()

        assert "hidden" not in output
        assert "shown" in output

    def test_file_logging_setup(self) -> None:
        """Log files are created and receive JSON lines."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                with patch("sys.stderr", new_callable=StringIO):
                    service = LoggingService(log_level="INFO", log_dir=log_dir)
                    service.configure()
                    service.get_logger("test").info("test file message", data="test")

            assert (log_dir / "app.log").exists()
            assert (log_dir / "error.log").exists()

            parsed = json.loads((log_dir / "app.log").read_text().strip())
            assert parsed["event"] == "test file message"
            assert parsed["data"] == "test"

    def test_error_file_logging(self) -> None:
        """Errors are also written to the error log."""
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                with patch("sys.stderr", new_callable=StringIO):
                    service = LoggingService(log_level="DEBUG", log_dir=log_dir)
                    service.configure()
                    service.get_logger("test").error("test error message", error_code=500)

            parsed = json.loads((log_dir / "error.log").read_text().strip())
            assert parsed["event"] == "test error message"
            assert parsed["error_code"] == 500
            assert parsed["level"] == "error"


def test_setup_logging_sets_environment() -> None:
    with patch.dict(os.environ, {}, clear=False):
        with patch("sys.stderr", new_callable=StringIO):
            service = setup_logging(log_level="debug", environment="production")

        assert os.environ["ENVIRONMENT"] == "production"
        assert service.log_level == "DEBUG"
        assert not service.is_development
        assert logging.getLogger().level == logging.DEBUG
