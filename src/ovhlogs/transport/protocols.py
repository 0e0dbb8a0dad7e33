"""Transport protocols understood by GELF inputs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..core.errors import UnsupportedProtocolError

__all__ = ["DEFAULT_ENDPOINT", "Endpoint", "Framing", "Protocol"]

DEFAULT_ENDPOINT = "gra1.logs.ovh.com"


class Framing(Enum):
    """How a payload is put on the wire."""

    STREAM = "stream"
    DATAGRAM = "datagram"


class Protocol(Enum):
    """GELF transports, each carrying its default port and framing policy."""

    GELF_UDP = ("udp", 2202, Framing.DATAGRAM, False)
    GELF_TCP = ("tcp", 2202, Framing.STREAM, False)
    GELF_TLS = ("tls", 12202, Framing.STREAM, True)

    def __init__(self, label: str, default_port: int, framing: Framing, secure: bool) -> None:
        self.label = label
        self.default_port = default_port
        self.framing = framing
        self.secure = secure

    def __str__(self) -> str:
        return f"gelf+{self.label}"

    @classmethod
    def parse(cls, value: "Protocol | str") -> "Protocol":
        if isinstance(value, Protocol):
            return value
        if isinstance(value, str):
            label = value.strip().lower()
            if label.startswith("gelf"):
                label = label[4:].lstrip("+_-")
            for member in cls:
                if member.label == label:
                    return member
        raise UnsupportedProtocolError(f"{value!r} not implemented or not supported")


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Collector address; ports fall back to each protocol's default."""

    host: str = DEFAULT_ENDPOINT
    port: int | None = None
    tls_port: int | None = None

    def address(self, protocol: Protocol) -> tuple[str, int]:
        if protocol.secure:
            return self.host, self.tls_port or protocol.default_port
        return self.host, self.port or protocol.default_port
