"""Logging setup: debug logs go to a file, or nowhere."""

import logging
from pathlib import Path

LOG_FORMAT = "%(filename)s:%(lineno)d: %(message)s"

PACKAGE_LOGGER = "openapi_typegen"


def setup_logging(log_file: Path | None = None) -> None:
    """Send this package's log records to ``log_file`` (truncated), or discard them."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()
        logger.setLevel(logging.WARNING)

    logger.addHandler(handler)
    logger.propagate = False
