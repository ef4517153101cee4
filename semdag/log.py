"""
Logging setup for semdag.

Library modules only create loggers; nothing is configured on import.
Applications that want semdag's diagnostics call setup_logging().
"""

from __future__ import annotations

import logging
from typing import Optional

import json_log_formatter

from .config import Settings, get_settings

LOGGER_NAME = "semdag"


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure the 'semdag' logger from settings.

    The root logger is left alone; only the package logger gets a handler.

    Args:
        settings: Settings to use (defaults to get_settings())

    Returns:
        The configured package logger
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)

    if settings.log_format == "json":
        formatter: logging.Formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger
