from __future__ import annotations

import json
import logging

import pytest

from ovhlogs.client import OvhLogs
from ovhlogs.config.loader import load_configuration
from ovhlogs.core.levels import SyslogLevel
from ovhlogs.handler import OvhLogsHandler


@pytest.fixture
def logger(connector):
    client = OvhLogs(load_configuration({"client": {"token": "T"}}), connector=connector, hostname=lambda: "h")
    handler = OvhLogsHandler(client)
    log = logging.getLogger("tests.handler")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    log.addHandler(handler)
    yield log
    log.removeHandler(handler)
    handler.close()


def test_record_becomes_entry(logger, connector) -> None:
    logger.warning("disk at %d%%", 91, extra={"volume": "/var", "ratio": 0.91})
    data = json.loads(connector.writes[0])
    assert data["short_message"] == "disk at 91%"
    assert data["full_message"] == "disk at 91%"
    assert data["level"] == SyslogLevel.WARNING
    assert isinstance(data["line"], int) and data["line"] > 0
    assert data["_volume"] == "/var"
    assert data["_ratio"] == 0.91
    assert data["_logger"] == "tests.handler"
    assert data["_X-OVH-TOKEN"] == "T"
    assert data["time_stamp"] > 0


def test_exception_text_goes_to_full_message(logger, connector) -> None:
    try:
        raise ValueError("bad value")
    except ValueError:
        logger.exception("failed")
    data = json.loads(connector.writes[0])
    assert data["short_message"] == "failed"
    assert "ValueError: bad value" in data["full_message"]
    assert data["level"] == SyslogLevel.ERROR


def test_send_failures_go_to_handle_error(logger, connector, monkeypatch: pytest.MonkeyPatch) -> None:
    connector.short_at = 0
    handled: list[logging.LogRecord] = []
    handler = logger.handlers[0]
    monkeypatch.setattr(handler, "handleError", handled.append)
    logger.info("lost")
    assert [record.getMessage() for record in handled] == ["lost"]


def test_non_scalar_extras_are_stringified(logger, connector) -> None:
    logger.info("payload", extra={"items": [1, 2]})
    assert json.loads(connector.writes[0])["_items"] == "[1, 2]"


def test_reserved_and_invalid_extra_names_are_renamed(logger, connector, monkeypatch: pytest.MonkeyPatch) -> None:
    handled: list[logging.LogRecord] = []
    monkeypatch.setattr(logger.handlers[0], "handleError", handled.append)
    logger.warning("request done", extra={"id": 42})
    logger.warning("request done", extra={"user name": "bob"})
    assert handled == []
    first, second = (json.loads(payload) for payload in connector.writes)
    assert first["_record_id"] == 42
    assert "_id" not in first
    assert second["_user_name"] == "bob"
