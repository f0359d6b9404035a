"""Structured JSON logging configuration.

Configures Python stdlib logging to emit JSON with GCP-compatible field names.
Log collectors auto-extract `severity`, `message`, and other fields from JSON on stdout.

Usage:
    from expense_bot.logging_config import configure_logging
    configure_logging()
"""

import copy
import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "expense-bot",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging configuration.

    Call once at application startup (e.g., in FastAPI lifespan).
    All subsequent ``logging.getLogger()`` calls will emit JSON to stdout
    with GCP-compatible ``severity`` field mapped from Python's ``levelname``.

    Args:
        level: Root log level name, usually ``Settings.log_level``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["root"]["level"] = level.upper()
    logging.config.dictConfig(config)
