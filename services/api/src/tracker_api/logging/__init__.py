"""Structured logging — JSON formatter, request-id filter, and setup."""

from tracker_api.logging.formatter import JSONLogFormatter
from tracker_api.logging.setup import RequestIDFilter, configure_logging, request_id_var

__all__ = ["JSONLogFormatter", "RequestIDFilter", "configure_logging", "request_id_var"]
