"""Logging setup for envlayer.

Nothing is printed unless ``setup_logging`` is called with a level or the
``ENVLAYER_LOG_LEVEL`` environment variable is set.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "envlayer"
LEVEL_ENV_VAR = "ENVLAYER_LOG_LEVEL"


def setup_logging(level: str | None = None) -> logging.Logger | None:
    """Attach a Rich stderr handler to the envlayer logger.

    The level comes from ``level``, falling back to ``ENVLAYER_LOG_LEVEL``.
    Returns None (and installs nothing) when neither is set.
    """
    level_name = level or os.getenv(LEVEL_ENV_VAR)
    if not level_name:
        return None

    log_level = logging.getLevelName(level_name.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger that stays silent until logging is configured."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
