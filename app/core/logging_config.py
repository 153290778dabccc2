"""Logging configuration for the URL shortener."""

import logging
import sys

LOGGER_NAMES = ("app", "url_shortener")


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a console handler to the application loggers.

    Module loggers are created with logging.getLogger(__name__), so they
    all live under the "app" namespace; request logs go to "url_shortener".

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
