"""Structured JSON logging.

Every record carries ``correlation_id`` from the request context. Records
from the contact handler also always carry ``client_key``, ``outcome`` and
``submission_id`` so submissions can be followed per client in the log
stream; fields the handler did not pass are emitted as ``null``.
"""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from asgi_correlation_id.context import correlation_id
from pythonjsonlogger.json import JsonFormatter

CONTACT_LOGGER = "landing.services.contact"
CONTACT_FIELDS = ("client_key", "outcome", "submission_id")
NO_CORRELATION_ID = "-"


class CorrelationIdFilter(logging.Filter):
    """Attach the current request correlation ID to each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or NO_CORRELATION_ID
        return True


class SubmissionFieldsFilter(logging.Filter):
    """Default the contact fields on records from the contact handler."""

    def __init__(self, logger_name: str = CONTACT_LOGGER) -> None:
        super().__init__()
        self.logger_name = logger_name

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == self.logger_name or record.name.startswith(
            self.logger_name + "."
        ):
            for field in CONTACT_FIELDS:
                if not hasattr(record, field):
                    setattr(record, field, None)
        return True


def logging_config(level: str = "INFO") -> dict[str, Any]:
    stream_handler = {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "filters": ["correlation", "submission_fields"],
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation": {"()": CorrelationIdFilter},
            "submission_fields": {"()": SubmissionFieldsFilter},
        },
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "fmt": (
                    "%(asctime)s %(levelname)s %(name)s "
                    "%(message)s %(correlation_id)s"
                ),
                "rename_fields": {"levelname": "level", "asctime": "time"},
            }
        },
        "handlers": {"default": stream_handler},
        "root": {"handlers": ["default"], "level": level},
        "loggers": {
            "landing": {"level": level},
            CONTACT_LOGGER: {"level": level},
            # uvicorn installs its own handlers; route them through ours.
            **{
                name: {"handlers": ["default"], "level": level, "propagate": False}
                for name in ("uvicorn.error", "uvicorn.access")
            },
        },
    }


def configure_logging(level: str = "INFO") -> None:
    dictConfig(logging_config(level))
