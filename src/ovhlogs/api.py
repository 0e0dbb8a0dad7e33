"""Public API surface for ovhlogs."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict

from .client import OvhLogs
from .config.loader import load_configuration
from .handler import OvhLogsHandler

_LOCK = threading.Lock()
_CLIENT: OvhLogs | None = None


def configure(overrides: Dict[str, Any] | None = None) -> OvhLogs:
    """Load configuration with ``overrides`` on top and install the shared client."""

    global _CLIENT
    client = OvhLogs(load_configuration(overrides or {}))
    with _LOCK:
        previous, _CLIENT = _CLIENT, client
    if previous is not None:
        previous.close()
    return client


def get_client() -> OvhLogs:
    """Return the shared client, configuring it from the environment if needed."""

    with _LOCK:
        client = _CLIENT
    if client is None:
        client = configure({})
    return client


def get_handler(level: int = logging.NOTSET) -> logging.Handler:
    """Return a ``logging`` handler backed by the shared client."""

    return OvhLogsHandler(get_client(), level=level)


def shutdown(timeout: float | None = None) -> None:
    """Flush pending asynchronous sends and forget the shared client."""

    global _CLIENT
    with _LOCK:
        client, _CLIENT = _CLIENT, None
    if client is not None:
        client.close(timeout)
