"""Structured logging configuration for the API service."""

import contextvars
import logging
import sys

from tracker_api.constants import ServiceName
from tracker_api.logging.formatter import JSONLogFormatter

# Set by RequestIDMiddleware for the duration of a request
request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


class RequestIDFilter(logging.Filter):
    """Attach the current request id to every record handled inside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get()
        return True


def configure_logging(service: ServiceName = ServiceName.API, level: str = "INFO") -> None:
    """Set up structured JSON logging on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    handler.addFilter(RequestIDFilter())
    root.addHandler(handler)
