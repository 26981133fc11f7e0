"""Logging setup via dictConfig."""

import logging.config

from permatrix.config import Settings


def build_logging_config(settings: Settings) -> dict:
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "{levelname} {asctime} {name} {message}",
                "style": "{",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple" if settings.environment == "development" else "verbose",
            },
        },
        "loggers": {
            "permatrix": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "psycopg.pool": {
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
    """Install handlers for the application loggers."""
    logging.config.dictConfig(build_logging_config(settings))
