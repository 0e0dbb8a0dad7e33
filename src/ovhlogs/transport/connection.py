"""Socket connections to the collector."""

from __future__ import annotations

import socket
import ssl
from dataclasses import dataclass
from typing import Callable

from ..core.errors import ConnectError, TLSHandshakeError, TransportError, UnsupportedProtocolError
from .protocols import Endpoint, Framing, Protocol

__all__ = ["Connection", "Connector", "Timeouts", "connect"]


@dataclass(frozen=True, slots=True)
class Timeouts:
    connect_s: float = 5.0
    write_s: float = 10.0


class Connection:
    """A socket owned by exactly one send; close it when the send is over."""

    def __init__(self, sock: socket.socket, protocol: Protocol) -> None:
        self.sock = sock
        self.protocol = protocol

    def write(self, data: bytes) -> int:
        """Write ``data`` and return how many bytes the OS accepted.

        Datagrams report what one ``send`` took; streams push everything with
        ``sendall`` inside the socket's write deadline.
        """

        try:
            if self.protocol.framing is Framing.STREAM:
                self.sock.sendall(data)
                return len(data)
            return self.sock.send(data)
        except OSError as exc:
            raise TransportError(f"write to {self.protocol} collector failed, {exc}") from exc

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc: BaseException | None, tb) -> None:  # type: ignore[override]
        self.close()


Connector = Callable[[Protocol, Endpoint, Timeouts], Connection]


def _open_stream(address: tuple[str, int], timeouts: Timeouts) -> socket.socket:
    try:
        return socket.create_connection(address, timeout=timeouts.connect_s)
    except OSError as exc:
        raise ConnectError(f"unable to connect to {address[0]}:{address[1]}, {exc}") from exc


def _open_tls(
    address: tuple[str, int],
    timeouts: Timeouts,
    context: ssl.SSLContext | None,
) -> socket.socket:
    raw = _open_stream(address, timeouts)
    tls_context = context or ssl.create_default_context()
    try:
        sock = tls_context.wrap_socket(raw, server_hostname=address[0])
    except OSError as exc:
        raw.close()
        raise TLSHandshakeError(f"TLS handshake with {address[0]}:{address[1]} failed, {exc}") from exc
    sock.settimeout(timeouts.write_s)
    return sock


def _open_datagram(address: tuple[str, int], timeouts: Timeouts) -> socket.socket:
    try:
        infos = socket.getaddrinfo(address[0], address[1], type=socket.SOCK_DGRAM)
    except OSError as exc:
        raise ConnectError(f"unable to resolve {address[0]}:{address[1]}, {exc}") from exc
    last_error: OSError | None = None
    for family, socktype, proto, _, sockaddr in infos:
        sock = socket.socket(family, socktype, proto)
        try:
            sock.settimeout(timeouts.connect_s)
            sock.connect(sockaddr)
        except OSError as exc:
            sock.close()
            last_error = exc
            continue
        return sock
    raise ConnectError(f"unable to connect to {address[0]}:{address[1]}, {last_error or 'no address found'}")


def connect(
    protocol: Protocol,
    endpoint: Endpoint,
    timeouts: Timeouts = Timeouts(),
    *,
    ssl_context: ssl.SSLContext | None = None,
) -> Connection:
    """Open a connection to ``endpoint`` for ``protocol``.

    For UDP this only fixes the destination; nothing is exchanged with the
    collector, so success says nothing about its reachability.
    """

    address = endpoint.address(protocol)
    if protocol is Protocol.GELF_TCP:
        sock = _open_stream(address, timeouts)
    elif protocol is Protocol.GELF_TLS:
        sock = _open_tls(address, timeouts, ssl_context)
    elif protocol is Protocol.GELF_UDP:
        sock = _open_datagram(address, timeouts)
    else:
        raise UnsupportedProtocolError(f"{protocol!r} not implemented or not supported")
    return Connection(sock, protocol)
