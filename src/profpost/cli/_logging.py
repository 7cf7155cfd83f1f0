"""Logging setup for CLI invocations."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Route ``profpost`` loggers to stderr at INFO (or DEBUG when verbose)."""
    logger = logging.getLogger("profpost")

    # Avoid duplicate handlers when invoked more than once in a process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(console_handler)


__all__ = ["LOG_FORMAT", "setup_logging"]
