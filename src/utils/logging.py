"""Structured JSON logging configuration.

Every record is one JSON object per line. Keys passed through
logger.info("...", extra={"userId": ...}) become top-level fields.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Any

SERVICE_NAME = "staffbook-api"

# LogRecord attributes that are never copied as extra fields
_RESERVED = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'taskName'}

# uvicorn logger name -> (level, propagate)
_UVICORN_LOGGERS = {
    "uvicorn": (None, False),
    "uvicorn.error": (None, False),
    "uvicorn.access": (logging.WARNING, False),
}


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z')


class JSONFormatter(logging.Formatter):
    """Format log records as JSON; non-serializable extras (datetimes, enums) go through str()."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": _timestamp(record),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RESERVED and not callable(value)
        )
        return json.dumps(log_data, default=str)


def setup_structured_logging(level: str | None = None) -> logging.Handler:
    """Send the root logger and uvicorn's loggers through one JSON handler.

    Level comes from the argument, then LOG_LEVEL, then INFO.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    root_logger.handlers = [handler]

    for name, (logger_level, propagate) in _UVICORN_LOGGERS.items():
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = propagate
        if logger_level is not None:
            logger.setLevel(logger_level)

    return handler
