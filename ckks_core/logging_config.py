"""
Logging configuration for ckks_core.

The library logs through the "ckks_core" logger and installs a NullHandler,
so nothing is printed unless the application asks for it:

    >>> import ckks_core
    >>> ckks_core.setup_logging(level="DEBUG")
"""

import logging
import sys

LOGGER_NAME = "ckks_core"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level="INFO",
    format=None,
    date_format=None,
    filename=None,
    stream=None,
    force=False,
    propagate=False,
):
    """
    Configure the ckks_core logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: Log format string, DEFAULT_FORMAT if None.
        date_format: Date format string, DEFAULT_DATE_FORMAT if None.
        filename: Also log to this file when given.
        stream: Stream for console output, sys.stderr if None. Pass False to
            skip console output.
        force: Remove existing handlers before adding new ones.
        propagate: Let records reach the application's root logger instead
            of managing handlers here.
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    # A lone NullHandler is only a library default, drop it when propagating
    if propagate and not force:
        if len(logger.handlers) == 1 and isinstance(logger.handlers[0], logging.NullHandler):
            force = True

    if force:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    logger.propagate = propagate

    if propagate and not filename and stream is None:
        return

    formatter = logging.Formatter(format or DEFAULT_FORMAT,
                                  datefmt=date_format or DEFAULT_DATE_FORMAT)

    if stream is not False:
        if stream is None:
            stream = sys.stderr
        stream_handler = logging.StreamHandler(stream)
        stream_handler.setLevel(log_level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def disable_logging():
    """Silence ckks_core completely."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Library mode by default
_root_logger = logging.getLogger(LOGGER_NAME)
if not _root_logger.handlers:
    _root_logger.addHandler(logging.NullHandler())
