"""Tests for logging setup."""

import logging
import sys

import pytest

from lifegrid.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("lifegrid")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_installs_single_console_handler(package_logger):
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1
    assert package_logger.handlers[0].stream is sys.stderr


def test_setup_logging_writes_file(package_logger, tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.INFO, str(log_file))

    logging.getLogger("lifegrid.core.game").info("cycle found")
    for handler in package_logger.handlers:
        handler.flush()

    assert "lifegrid.core.game - INFO - cycle found" in log_file.read_text(encoding="utf-8")
