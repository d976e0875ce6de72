"""Tests for logging setup."""

import json
import logging

from ecalfit.ui.logging import close_logging, log, log_dict, log_section, setup_logging


class TestSetupLogging:
    """Tests for setup_logging and helpers."""

    def test_text_log_file(self, tmp_path):
        path = tmp_path / "logs" / "run.log"
        setup_logging(path)
        log_section("fit")
        log_dict({"mu": 2614.5})
        close_logging()
        content = path.read_text()
        assert "session started" in content
        assert "=== FIT ===" in content
        assert "mu: 2614.5" in content
        assert "session completed" in content

    def test_json_log_file(self, tmp_path):
        path = tmp_path / "run.json"
        setup_logging(path)
        log("hello", level="warning")
        close_logging()
        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert any(r["message"] == "hello" and r["level"] == "WARNING" for r in records)

    def test_library_records_captured(self, tmp_path):
        """Records of child loggers reach the configured handlers."""
        path = tmp_path / "run.log"
        setup_logging(path, level=logging.DEBUG)
        logging.getLogger("ecalfit.core.diagnostics.gof").warning("low counts")
        close_logging()
        assert "low counts" in path.read_text()

    def test_helpers_without_setup(self):
        close_logging()
        log("ignored")
        log_section("ignored")
        log_dict({"a": 1})

    def test_null_handler(self):
        logger = setup_logging()
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
        close_logging()
