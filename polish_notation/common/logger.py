"""Shared logger for the polish_notation package."""
import logging
import os
import sys

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV: str = "POLISH_NOTATION_LOG_LEVEL"


def get_logger(name: str = "polish_notation") -> logging.Logger:
    """
    Return the package logger, configuring its handler once.

    The level is read from the ``POLISH_NOTATION_LOG_LEVEL`` environment variable (default ``INFO``).

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
    return log


logger: logging.Logger = get_logger()
