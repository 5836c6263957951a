"""Logging setup for the lifegrid drivers."""

from typing import Optional
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Records go to stderr so that stdout stays free for rendered frames.
    Calling this again replaces the handlers installed by an earlier call.

    Args:
        level: Logging level, e.g. logging.DEBUG
        log_file: Optional path that also receives every record

    Returns:
        The "lifegrid" logger
    """
    logger = logging.getLogger("lifegrid")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized")
    return logger
