"""Diagnostic logging to stderr."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the ``pipeask`` logger and return it."""
    logger = logging.getLogger("pipeask")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
