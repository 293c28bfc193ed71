"""Logging configuration for inkdrop-export."""

import sys

from loguru import logger

_VERBOSE_FORMAT = "[{time:YYYY-MM-DD[T]HH:mm:ss.SSS!UTC}Z] [{level}] {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru with appropriate level."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format="{message}")
