"""The log entry data model."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict

from ..utils.environment import Clock, HostnameProvider, epoch_millis_timestamp, local_hostname
from .errors import InvalidEntryError
from .levels import SyslogLevel

__all__ = ["GELF_VERSION", "SHORT_MESSAGE_MAX_LENGTH", "Entry", "derive_short_message"]

GELF_VERSION = "1.1"
SHORT_MESSAGE_MAX_LENGTH = 80
_ELLIPSIS = "..."
_FIELD_NAME = re.compile(r"[\w.\-]+")


def derive_short_message(full_message: str) -> str:
    """Return ``full_message`` cut to 80 characters, with ``...`` when cut."""

    if len(full_message) > SHORT_MESSAGE_MAX_LENGTH:
        return full_message[:SHORT_MESSAGE_MAX_LENGTH] + _ELLIPSIS
    return full_message


@dataclass(slots=True)
class Entry:
    """One log record as pushed to the collector.

    ``version`` and ``auth_token`` belong to the client: whatever the caller
    puts there is replaced by :meth:`with_defaults`. Empty strings and a zero
    ``timestamp`` mean "unset".
    """

    full_message: str = ""
    short_message: str = ""
    host: str = ""
    timestamp: float = 0.0
    level: int = SyslogLevel.INFO
    line: int | None = None
    additional_fields: Dict[str, Any] = field(default_factory=dict)
    version: str = ""
    auth_token: str = ""

    def with_defaults(
        self,
        *,
        auth_token: str,
        clock: Clock = epoch_millis_timestamp,
        hostname: HostnameProvider = local_hostname,
    ) -> "Entry":
        """Return a copy ready to be sent; ``self`` is left untouched."""

        host = self.host or hostname()
        timestamp = self.timestamp
        if timestamp == 0:
            timestamp = math.floor(clock() * 1000) / 1000.0
        short_message = self.short_message or derive_short_message(self.full_message)
        return replace(
            self,
            version=GELF_VERSION,
            auth_token=auth_token,
            host=host,
            timestamp=timestamp,
            short_message=short_message,
            additional_fields=dict(self.additional_fields),
        )

    def validate(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidEntryError(f"level must be an integer, got {self.level!r}")
        if not SyslogLevel.EMERGENCY <= self.level <= SyslogLevel.DEBUG:
            raise InvalidEntryError(f"level must be a syslog severity 0-7, got {self.level}")
        if self.line is not None and self.line < 0:
            raise InvalidEntryError(f"line must not be negative, got {self.line}")
        for name in self.additional_fields:
            if not _FIELD_NAME.fullmatch(name):
                raise InvalidEntryError(f"invalid additional field name {name!r}")
            if name == "id":
                raise InvalidEntryError("additional field 'id' is reserved by GELF")
