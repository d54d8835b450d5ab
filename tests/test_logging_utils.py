"""Tests for logger setup."""

import logging

import colorlog

from insight_engine.utils.logging_utils import get_logger, setup_logger


class TestSetupLogger:
    def test_repeated_setup_replaces_handlers(self):
        setup_logger("insight_test.repeat")
        logger = setup_logger("insight_test.repeat", level="warning")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert not logger.propagate

    def test_colorized_console(self):
        logger = setup_logger("insight_test.color")
        assert isinstance(logger.handlers[0].formatter, colorlog.ColoredFormatter)

        plain = setup_logger("insight_test.plain", colorize=False)
        assert not isinstance(plain.handlers[0].formatter, colorlog.ColoredFormatter)

    def test_file_handler_writes(self, tmp_path):
        log_file = tmp_path / "logs" / "engine.log"
        logger = setup_logger("insight_test.file", log_file=str(log_file))
        logger.info("Summarizing dataset: sales.csv")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "INFO - Summarizing dataset: sales.csv" in log_file.read_text()
        logger.handlers[1].close()


def test_package_modules_share_the_package_logger():
    logger = get_logger("insight_engine.profiling.statistics")
    assert logger.handlers == []
    assert logger.propagate
    assert logging.getLogger("insight_engine").handlers
