"""Logging configuration helpers."""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from .config import LoggingSettings

PACKAGE_LOGGER = "lazydi"


def _formatter(structured: bool) -> dict[str, Any]:
    """Return the dictConfig formatter fragment for the requested style."""
    if structured:
        return {
            "format": '{{"time": "{asctime}", "level": "{levelname}", '
            '"logger": "{name}", "message": "{message}"}}',
            "style": "{",
        }
    return {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"}


def configure_logging(settings: LoggingSettings, *, package_only: bool = False) -> None:
    """Configure console logging according to ``settings``.

    With ``package_only`` the handler is attached to the ``lazydi`` logger
    instead of the root logger, leaving the host application's logging alone.
    """
    logger_config = {"handlers": ["console"], "level": settings.level}

    dict_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": _formatter(settings.structured)},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": settings.level,
            },
        },
    }
    if package_only:
        dict_config["loggers"] = {
            PACKAGE_LOGGER: {**logger_config, "propagate": False},
        }
    else:
        dict_config["root"] = logger_config

    logging.config.dictConfig(dict_config)


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
