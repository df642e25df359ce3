"""JSON log formatter for structured logging output."""

import json
import logging
from datetime import UTC, datetime

# Optional attributes copied from the record when present (set via ``extra=`` or filters)
_CONTEXT_FIELDS = ("request_id", "doc_id", "sheet_type")


class JSONLogFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Output format::

        {"timestamp": "...", "level": "INFO", "service": "api",
         "logger": "tracker_core.assembler", "message": "...", "request_id": "...", ...}
    """

    def __init__(self, service: str = "api") -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value:
                entry[name] = value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)
