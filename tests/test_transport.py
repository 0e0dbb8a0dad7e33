from __future__ import annotations

import socket
import threading

import pytest

from ovhlogs.core.errors import ConnectError, TLSHandshakeError, UnsupportedProtocolError
from ovhlogs.transport.connection import Timeouts, connect
from ovhlogs.transport.protocols import DEFAULT_ENDPOINT, Endpoint, Framing, Protocol
from ovhlogs.transport.sender import send_payload

_TIMEOUTS = Timeouts(connect_s=2.0, write_s=2.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("udp", Protocol.GELF_UDP),
        ("TCP", Protocol.GELF_TCP),
        ("gelf+tls", Protocol.GELF_TLS),
        ("GelfUDP", Protocol.GELF_UDP),
        (Protocol.GELF_TCP, Protocol.GELF_TCP),
    ],
)
def test_protocol_parse(value, expected: Protocol) -> None:
    assert Protocol.parse(value) is expected


@pytest.mark.parametrize("value", ["http", "", 1])
def test_protocol_parse_rejects_unknown(value) -> None:
    with pytest.raises(UnsupportedProtocolError):
        Protocol.parse(value)


def test_protocol_variants_carry_port_and_framing() -> None:
    assert (Protocol.GELF_UDP.default_port, Protocol.GELF_UDP.framing) == (2202, Framing.DATAGRAM)
    assert (Protocol.GELF_TCP.default_port, Protocol.GELF_TCP.framing) == (2202, Framing.STREAM)
    assert (Protocol.GELF_TLS.default_port, Protocol.GELF_TLS.framing) == (12202, Framing.STREAM)
    assert Protocol.GELF_TLS.secure and not Protocol.GELF_TCP.secure


def test_endpoint_address_uses_distinct_tls_port() -> None:
    endpoint = Endpoint()
    assert endpoint.address(Protocol.GELF_UDP) == (DEFAULT_ENDPOINT, 2202)
    assert endpoint.address(Protocol.GELF_TLS) == (DEFAULT_ENDPOINT, 12202)
    custom = Endpoint(host="127.0.0.1", port=5000, tls_port=5001)
    assert custom.address(Protocol.GELF_TCP) == ("127.0.0.1", 5000)
    assert custom.address(Protocol.GELF_TLS) == ("127.0.0.1", 5001)


def test_udp_datagrams_reach_listener() -> None:
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    receiver.bind(("127.0.0.1", 0))
    receiver.settimeout(2.0)
    port = receiver.getsockname()[1]
    try:
        payload = b"a" * 3000
        with connect(Protocol.GELF_UDP, Endpoint(host="127.0.0.1", port=port), _TIMEOUTS) as conn:
            send_payload(payload, Protocol.GELF_UDP, conn)
        frames = [receiver.recv(65535) for _ in range(3)]
    finally:
        receiver.close()
    frames.sort(key=lambda frame: frame[10])
    assert b"".join(frame[12:] for frame in frames) == payload


def test_tcp_payload_reaches_listener() -> None:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    server.settimeout(2.0)
    port = server.getsockname()[1]
    received: list[bytes] = []

    def accept() -> None:
        conn, _ = server.accept()
        with conn:
            chunks = []
            while True:
                data = conn.recv(65535)
                if not data:
                    break
                chunks.append(data)
            received.append(b"".join(chunks))

    thread = threading.Thread(target=accept)
    thread.start()
    payload = b'{"version":"1.1"}' * 200
    try:
        conn = connect(Protocol.GELF_TCP, Endpoint(host="127.0.0.1", port=port), _TIMEOUTS)
        with conn:
            send_payload(payload, Protocol.GELF_TCP, conn)
        thread.join(timeout=5.0)
    finally:
        server.close()
    assert received == [payload]


def _unused_port() -> int:
    spare = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    spare.bind(("127.0.0.1", 0))
    port = spare.getsockname()[1]
    spare.close()
    return port


def test_tcp_refused_raises_connect_error() -> None:
    with pytest.raises(ConnectError):
        connect(Protocol.GELF_TCP, Endpoint(host="127.0.0.1", port=_unused_port()), _TIMEOUTS)


def test_unresolvable_udp_host_raises_connect_error() -> None:
    with pytest.raises(ConnectError):
        connect(Protocol.GELF_UDP, Endpoint(host="host.invalid", port=2202), _TIMEOUTS)


def test_tls_handshake_failure() -> None:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    server.settimeout(2.0)
    port = server.getsockname()[1]

    def accept_and_hang_up() -> None:
        conn, _ = server.accept()
        conn.sendall(b"this is not TLS\r\n")
        conn.close()

    thread = threading.Thread(target=accept_and_hang_up)
    thread.start()
    try:
        with pytest.raises(TLSHandshakeError):
            connect(Protocol.GELF_TLS, Endpoint(host="127.0.0.1", tls_port=port), _TIMEOUTS)
        thread.join(timeout=5.0)
    finally:
        server.close()


class _RecordingSocket:
    def __init__(self) -> None:
        self.timeouts: list[float | None] = []
        self.closed = False

    def settimeout(self, value: float | None) -> None:
        self.timeouts.append(value)

    def close(self) -> None:
        self.closed = True


class _StubContext:
    def __init__(self) -> None:
        self.wrapped = _RecordingSocket()
        self.server_hostname: str | None = None

    def wrap_socket(self, raw, server_hostname: str | None = None) -> _RecordingSocket:
        self.server_hostname = server_hostname
        return self.wrapped


def test_tls_write_deadline_applies_after_handshake(monkeypatch: pytest.MonkeyPatch) -> None:
    opened: list[tuple[tuple[str, int], float]] = []

    def create_connection(address, timeout):
        opened.append((address, timeout))
        return _RecordingSocket()

    monkeypatch.setattr(socket, "create_connection", create_connection)
    context = _StubContext()
    connection = connect(
        Protocol.GELF_TLS,
        Endpoint(host="collector.test", tls_port=6514),
        Timeouts(connect_s=3.0, write_s=7.0),
        ssl_context=context,
    )
    assert opened == [(("collector.test", 6514), 3.0)]
    assert context.server_hostname == "collector.test"
    assert connection.sock is context.wrapped
    assert context.wrapped.timeouts == [7.0]
