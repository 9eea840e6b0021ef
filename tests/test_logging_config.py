"""
Tests for logging setup
"""
import json
import logging

import pytest

from chainlog.logging_config import StructuredFormatter, setup_logging, get_logger


class TestStructuredFormatter:
    """Test JSON log formatting"""

    def test_includes_extra_fields(self):
        record = logging.LogRecord("chainlog.engine", logging.INFO, __file__, 1, "done", None, None)
        record.extra_fields = {"event_type": "inference_run", "iterations": 3}
        entry = json.loads(StructuredFormatter().format(record))
        assert entry["message"] == "done"
        assert entry["level"] == "INFO"
        assert entry["event_type"] == "inference_run"
        assert entry["iterations"] == 3


class TestSetupLogging:
    """Test root logger configuration"""

    def test_sets_level(self):
        setup_logging(log_level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("chainlog.unification").level == logging.NOTSET

    def test_quiets_search_loggers(self):
        setup_logging(log_level="INFO")
        assert logging.getLogger("chainlog.matching").level == logging.WARNING

    @pytest.mark.parametrize("level", ["LOUD", "verbose", 10])
    def test_rejects_unknown_level(self, level):
        with pytest.raises(ValueError):
            setup_logging(log_level=level)

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "chainlog.log"
        setup_logging(log_level="INFO", log_file=log_file, enable_structured_logging=True)
        get_logger("chainlog.engine").log_inference_run("fixpoint", 2, 5, 1, 0.5)
        for handler in logging.getLogger().handlers:
            handler.flush()
            if isinstance(handler, logging.FileHandler):
                handler.close()
        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["event_type"] == "inference_run"
        assert entry["status"] == "fixpoint"
