from __future__ import annotations

import logging

import pytest

from ovhlogs.core.levels import SyslogLevel, ensure_level, from_logging_level


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("info", SyslogLevel.INFO),
        ("ERROR", SyslogLevel.ERROR),
        ("warn", SyslogLevel.WARNING),
        (" 3 ", SyslogLevel.ERROR),
        (7, SyslogLevel.DEBUG),
    ],
)
def test_ensure_level(value, expected: SyslogLevel) -> None:
    assert ensure_level(value) is expected


@pytest.mark.parametrize("value", ["verbose", 9, "12"])
def test_ensure_level_rejects_unknown(value) -> None:
    with pytest.raises(ValueError):
        ensure_level(value)


@pytest.mark.parametrize(
    ("levelno", "expected"),
    [
        (logging.DEBUG, SyslogLevel.DEBUG),
        (logging.INFO, SyslogLevel.INFO),
        (logging.WARNING, SyslogLevel.WARNING),
        (logging.ERROR, SyslogLevel.ERROR),
        (logging.CRITICAL, SyslogLevel.CRITICAL),
        (logging.NOTSET, SyslogLevel.DEBUG),
    ],
)
def test_from_logging_level(levelno: int, expected: SyslogLevel) -> None:
    assert from_logging_level(levelno) is expected
