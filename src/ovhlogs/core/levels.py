"""Syslog severity helpers."""

from __future__ import annotations

import logging
from enum import IntEnum

__all__ = ["SyslogLevel", "ensure_level", "from_logging_level", "get_level_by_name"]


class SyslogLevel(IntEnum):
    """Syslog severities as carried by the GELF ``level`` field."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


_ALIASES = {
    "EMERG": SyslogLevel.EMERGENCY,
    "CRIT": SyslogLevel.CRITICAL,
    "FATAL": SyslogLevel.CRITICAL,
    "ERR": SyslogLevel.ERROR,
    "WARN": SyslogLevel.WARNING,
    "INFORMATIONAL": SyslogLevel.INFO,
    "TRACE": SyslogLevel.DEBUG,
}


def get_level_by_name(name: str) -> SyslogLevel:
    """Resolve a syslog severity from a friendly name or a digit string."""

    key = name.strip().upper()
    if key.isdigit():
        return SyslogLevel(int(key))
    if key in SyslogLevel.__members__:
        return SyslogLevel[key]
    if key in _ALIASES:
        return _ALIASES[key]
    raise ValueError(f"Unknown syslog level: {name!r}")


def ensure_level(value: int | str) -> SyslogLevel:
    """Normalize user supplied level values."""

    if isinstance(value, str):
        return get_level_by_name(value)
    return SyslogLevel(value)


def from_logging_level(levelno: int) -> SyslogLevel:
    """Map a stdlib ``logging`` level number onto the closest syslog severity."""

    if levelno >= logging.CRITICAL:
        return SyslogLevel.CRITICAL
    if levelno >= logging.ERROR:
        return SyslogLevel.ERROR
    if levelno >= logging.WARNING:
        return SyslogLevel.WARNING
    if levelno >= logging.INFO:
        return SyslogLevel.INFO
    return SyslogLevel.DEBUG
