"""
Logging configuration.

Called once at application start-up. Every module logs through
a module-level ``logging.getLogger(__name__)``.
"""

import logging.config

from bookkeeping.config import Settings


def get_logging_config(settings: Settings) -> dict:
    """Build the dictConfig for the application loggers."""
    level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "bookkeeping": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(get_logging_config(settings))
