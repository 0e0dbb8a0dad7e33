"""``logging`` handler shipping records through an :class:`OvhLogs` client."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Iterable

from .client import OvhLogs
from .core.entry import Entry, derive_short_message
from .core.levels import from_logging_level

__all__ = ["OvhLogsHandler"]

_STANDARD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "asctime",
    "message",
}

_INVALID_FIELD_CHARS = re.compile(r"[^\w.\-]")


def _field_name(key: str) -> str:
    """Turn a record attribute name into a GELF additional field name."""

    name = _INVALID_FIELD_CHARS.sub("_", key)
    return "record_id" if name == "id" else name


class OvhLogsHandler(logging.Handler):
    """Turn each record into an :class:`Entry` and send it.

    Record attributes that are not part of ``LogRecord`` itself (anything
    passed through ``extra=``) become GELF additional fields; characters GELF
    does not allow in a field name become ``_`` and ``id`` becomes ``record_id``.
    """

    def __init__(
        self,
        client: OvhLogs,
        *,
        level: int = logging.NOTSET,
        include_logger_name: bool = True,
        drop_fields: Iterable[str] = (),
    ) -> None:
        super().__init__(level)
        self.client = client
        self.include_logger_name = include_logger_name
        self.drop_fields = set(drop_fields)

    def to_entry(self, record: logging.LogRecord) -> Entry:
        full_message = record.getMessage()
        if record.exc_info:
            formatter = self.formatter or logging.Formatter()
            full_message = f"{full_message}\n{formatter.formatException(record.exc_info)}"
        if record.stack_info:
            full_message = f"{full_message}\n{record.stack_info}"

        fields: Dict[str, Any] = {}
        if self.include_logger_name:
            fields["logger"] = record.name
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key in self.drop_fields or key.startswith("_"):
                continue
            name = _field_name(key)
            if not name:
                continue
            fields[name] = value if isinstance(value, (str, int, float, bool)) or value is None else str(value)

        return Entry(
            full_message=full_message,
            short_message=derive_short_message(record.getMessage()),
            timestamp=math.floor(record.created * 1000) / 1000.0,
            level=from_logging_level(record.levelno),
            line=record.lineno,
            additional_fields=fields,
        )

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            self.client.send(self.to_entry(record))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()
