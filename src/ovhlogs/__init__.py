"""ovhlogs public API."""

import logging

from .api import configure, get_client, get_handler, shutdown
from .client import LogPanic, OvhLogs
from .core.entry import Entry
from .core.errors import (
    ConfigurationError,
    ConnectError,
    EncodingError,
    InvalidEntryError,
    OvhLogsError,
    PayloadTooLargeError,
    RandomnessError,
    ShortWriteError,
    TLSHandshakeError,
    TransportError,
    UnsupportedCompressionError,
    UnsupportedProtocolError,
)
from .core.levels import SyslogLevel
from .encoding.compression import Compression
from .handler import OvhLogsHandler
from .transport.protocols import Endpoint, Protocol
from .version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Compression",
    "ConfigurationError",
    "ConnectError",
    "EncodingError",
    "Endpoint",
    "Entry",
    "InvalidEntryError",
    "LogPanic",
    "OvhLogs",
    "OvhLogsError",
    "OvhLogsHandler",
    "PayloadTooLargeError",
    "Protocol",
    "RandomnessError",
    "ShortWriteError",
    "SyslogLevel",
    "TLSHandshakeError",
    "TransportError",
    "UnsupportedCompressionError",
    "UnsupportedProtocolError",
    "configure",
    "get_client",
    "get_handler",
    "shutdown",
    "__version__",
]
