#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging module: one console handler on the package logger, shared by every
module logger beneath it.

Module loggers carry no handlers of their own and the package logger does not
propagate, so each record prints once even when uvicorn or
logging.basicConfig has configured the root logger.
"""

import logging
from .config import LOG_LEVEL, LOG_FORMAT

PACKAGE_LOGGER = "dcf_screener"


def configure_package_logger() -> logging.Logger:
    """Attach the console handler to the package logger (once)."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        package_logger.propagate = False
    package_logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package logger.

    Args:
        name: Module name (typically __name__); names outside the package,
            such as "__main__", are nested under it

    Returns:
        Child logger that emits through the package handler
    """
    configure_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
