"""Shared logging utilities."""
from __future__ import annotations

import logging
from typing import Optional, TextIO

from ..domain.configuration import LoggingSettings


LOGGER_NAME = "txt2html"


def configure_logger(settings: LoggingSettings, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the package logger; later calls only update the level."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(settings.format))
    logger.addHandler(handler)
    return logger
