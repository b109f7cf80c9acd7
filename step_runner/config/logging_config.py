from __future__ import annotations

import logging
import os
from logging.config import dictConfig
from typing import Any


def _default_logging_dict(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s - %(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def configure_logging(level_name: str | int | None = None) -> None:
    """Send the runner's step progress and failure lines to stdout.

    `level_name` is a level name such as "debug" or a number. Without one,
    LOG_LEVEL is read; an unrecognised name runs at INFO.
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "INFO")

    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), None)
        if not isinstance(level, int):
            level = logging.INFO
    else:
        level = level_name

    dictConfig(_default_logging_dict(logging.getLevelName(level)))
    logging.getLogger().setLevel(level)
