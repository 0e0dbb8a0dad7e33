"""Exception hierarchy for ovhlogs."""

from __future__ import annotations

__all__ = [
    "OvhLogsError",
    "ConfigurationError",
    "UnsupportedCompressionError",
    "UnsupportedProtocolError",
    "InvalidEntryError",
    "EncodingError",
    "TransportError",
    "ConnectError",
    "TLSHandshakeError",
    "ShortWriteError",
    "PayloadTooLargeError",
    "RandomnessError",
]


class OvhLogsError(Exception):
    """Base class for every error raised by ovhlogs."""


class ConfigurationError(OvhLogsError, ValueError):
    """Raised when configuration validation fails."""


class UnsupportedCompressionError(ConfigurationError):
    """Raised for a compression mode that is not gzip, zlib or none."""


class UnsupportedProtocolError(ConfigurationError):
    """Raised for a transport protocol that is not udp, tcp or tls."""


class InvalidEntryError(OvhLogsError, ValueError):
    """Raised when an entry carries values GELF cannot represent."""


class EncodingError(OvhLogsError):
    """Raised when an entry cannot be serialised or compressed."""


class TransportError(OvhLogsError):
    """Raised when writing to the collector fails."""


class ConnectError(TransportError):
    """Raised when a connection to the collector cannot be established."""


class TLSHandshakeError(ConnectError):
    """Raised when the TLS handshake with the collector fails."""


class ShortWriteError(TransportError):
    """Raised when fewer bytes were written than requested."""

    def __init__(self, written: int, expected: int) -> None:
        super().__init__(f"entry not completely sent {written}/{expected}")
        self.written = written
        self.expected = expected


class PayloadTooLargeError(TransportError):
    """Raised when a payload needs more chunks than GELF allows."""


class RandomnessError(OvhLogsError):
    """Raised when the random source cannot provide a chunk message id."""
