"""Unit tests for core logger module."""
import logging

from sigtrader.core.logger import setup_logging


class TestSetupLoggingBasics:
    def test_setup_logging_returns_logger(self):
        log = setup_logging("SIG_TEST")
        assert isinstance(log, logging.Logger)

    def test_default_name_is_package(self):
        log = setup_logging()
        assert log.name == "sigtrader"

    def test_setup_logging_default_level(self):
        log = setup_logging("SIG_DEFAULT")
        assert log.level == logging.INFO

    def test_lowercase_level(self):
        log = setup_logging("SIG_LOWER", level="debug")
        assert log.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        log = setup_logging("SIG_UNKNOWN", level="CHATTY")
        assert log.level == logging.INFO


class TestSetupLoggingHandlers:
    def test_console_handler_with_format(self):
        log = setup_logging("SIG_FORMAT")
        handler = log.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert "%(levelname)s" in handler.formatter._fmt
        assert "%(name)s" in handler.formatter._fmt

    def test_repeated_setup_doesnt_duplicate_handlers(self):
        log = setup_logging("SIG_DUP")
        count = len(log.handlers)
        log = setup_logging("SIG_DUP", level="WARNING")
        assert len(log.handlers) == count
        assert log.level == logging.WARNING

    def test_file_handler_created_in_log_dir(self, tmp_path):
        log_dir = tmp_path / "logs"
        log = setup_logging("SIG_FILE", log_dir=str(log_dir))
        assert len(log.handlers) == 2
        log.info("hello")
        for handler in log.handlers:
            handler.flush()
        assert (log_dir / "SIG_FILE.log").exists()
        for handler in list(log.handlers):
            handler.close()
            log.removeHandler(handler)
