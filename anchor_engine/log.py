"""Logging configuration for applications embedding the anchor engine."""

from __future__ import annotations

import logging.config
import os
from typing import Any, Dict


def logging_config(level: str | None = None) -> Dict[str, Any]:
    log_level = (level or os.getenv("ANCHOR_ENGINE_LOG_LEVEL", "INFO")).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            },
        },
        "loggers": {
            "anchor_engine": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Attach a console handler to the ``anchor_engine`` logger tree."""

    logging.config.dictConfig(logging_config(level))
