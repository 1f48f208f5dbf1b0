"""Logging helpers shared by the checker and the CLI."""

from __future__ import annotations

import logging

_LOGGER_NAME = "linkcheck"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``linkcheck`` hierarchy.

    Module names (``linkcheck.checker.runner``) are used as they are.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    full_name = f"{_LOGGER_NAME}.{name}"
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send ``linkcheck`` log records to stderr; DEBUG when *verbose*."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # The CLI may be invoked several times in one process (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[linkcheck] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
