"""
Logging configuration for the API process.

One stdout handler on the root logger; uvicorn and accounts loggers propagate
to it. Passed to ``uvicorn.run(log_config=...)`` so the server does not install
its own handlers.
"""

import logging
import logging.config
from typing import Any, Dict

# SQLAlchemy logs every statement at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for GET /health."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and "/health" in message)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    level = level.upper()
    loggers: Dict[str, Any] = {
        "accounts": {"level": level},
        "uvicorn": {"level": level},
        "uvicorn.access": {"level": "INFO"},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"skip_health": {"()": HealthCheckFilter}},
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["skip_health"],
            },
        },
        "loggers": loggers,
        "root": {"level": level, "handlers": ["stdout"]},
    }


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level))
