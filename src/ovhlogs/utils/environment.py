"""Process-wide collaborators (clock, hostname) behind injectable callables."""

from __future__ import annotations

import socket
import time
from typing import Callable

__all__ = ["Clock", "HostnameProvider", "epoch_millis_timestamp", "local_hostname"]

Clock = Callable[[], float]
HostnameProvider = Callable[[], str]

_UNDEFINED_HOST = "undefined"


def epoch_millis_timestamp() -> float:
    """Return seconds since the epoch, truncated to millisecond precision."""

    return (time.time_ns() // 1_000_000) / 1000.0


def local_hostname() -> str:
    """Return the local hostname, or ``"undefined"`` if it cannot be read."""

    try:
        name = socket.gethostname()
    except OSError:
        return _UNDEFINED_HOST
    return name or _UNDEFINED_HOST
