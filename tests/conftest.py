from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

import ovhlogs.api as ovhlogs_api
from ovhlogs.transport.connection import Timeouts
from ovhlogs.transport.protocols import Endpoint, Protocol


class FakeConnection:
    """Records writes; ``short_at`` makes the n-th write report one byte less."""

    def __init__(self, short_at: int | None = None) -> None:
        self.writes: List[bytes] = []
        self.closed = False
        self.short_at = short_at

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        if self.short_at is not None and len(self.writes) - 1 == self.short_at:
            return len(data) - 1
        return len(data)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeConnection":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class FakeConnector:
    def __init__(self, short_at: int | None = None) -> None:
        self.short_at = short_at
        self.connections: List[FakeConnection] = []
        self.calls: List[tuple[Protocol, Endpoint, Timeouts]] = []

    def __call__(self, protocol: Protocol, endpoint: Endpoint, timeouts: Timeouts) -> FakeConnection:
        self.calls.append((protocol, endpoint, timeouts))
        connection = FakeConnection(self.short_at)
        self.connections.append(connection)
        return connection

    @property
    def writes(self) -> List[bytes]:
        return [data for conn in self.connections for data in conn.writes]


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture(autouse=True)
def reset_ovhlogs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("OVHLOGS"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("ovhlogs.config.loader.user_config_dir", lambda _: str(tmp_path / "no-user-config"))
    monkeypatch.chdir(tmp_path)
    yield
    ovhlogs_api.shutdown(timeout=5.0)


@pytest.fixture
def make_connection() -> Callable[..., FakeConnection]:
    return FakeConnection
