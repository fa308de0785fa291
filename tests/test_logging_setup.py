"""Tests for setup_logging."""

import logging

import pytest

from configtx.logging_setup import setup_logging


@pytest.fixture
def logger_name():
    name = "configtx.test_logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestSetupLogging:
    def test_console_only(self, logger_name):
        logger = setup_logging(logger_name)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.INFO

    def test_verbose_console(self, logger_name):
        logger = setup_logging(logger_name, verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_file_handler(self, logger_name, tmp_path):
        log_file = tmp_path / "logs" / "configtx.log"
        logger = setup_logging(logger_name, log_file=str(log_file))

        logger.debug("written to file only")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "written to file only" in log_file.read_text()

    def test_repeated_setup_does_not_stack(self, logger_name):
        setup_logging(logger_name)
        logger = setup_logging(logger_name)
        assert len(logger.handlers) == 1
