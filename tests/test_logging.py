"""Tests for logging setup."""

import json
import logging

from ct_intel.config import LoggingConfig
from ct_intel.logging import JSONFormatter, get_logger, log_execution_time, setup_logging


class TestLogging:
    """Tests for the ct_intel logger hierarchy."""

    def test_get_logger_namespaced(self):
        """Test that loggers live under the ct_intel namespace."""
        assert get_logger("loader").name == "ct_intel.loader"
        assert get_logger("ct_intel.brief").name == "ct_intel.brief"

    def test_setup_adds_file_handlers(self, tmp_path):
        """Test that text and JSON file handlers are added when configured."""
        config = LoggingConfig(level="DEBUG", file=str(tmp_path / "ct.log"), json_file=str(tmp_path / "ct.jsonl"))

        logger = setup_logging(config)
        try:
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 3
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_json_formatter(self):
        """Test that JSONFormatter emits the formatted message and level."""
        record = logging.LogRecord("ct_intel.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"

    def test_execution_time_logged(self, caplog):
        """Test that log_execution_time logs on completion."""
        logger = get_logger("timing")

        with caplog.at_level(logging.DEBUG, logger="ct_intel"):
            with log_execution_time(logger, "unit work"):
                pass

        assert any("Completed: unit work" in r.getMessage() for r in caplog.records)
