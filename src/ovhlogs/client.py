"""Client pushing entries to an OVH Logs Data Platform stream."""

from __future__ import annotations

import logging
import os
import sys
from functools import partial
from typing import Any, NoReturn

from .config.schema import DefaultsConfig, OvhLogsConfig
from .core.dispatch import AsyncDispatcher, Dispatcher, SyncDispatcher, log_async_error
from .core.entry import Entry
from .core.levels import SyslogLevel
from .core.validation import validate_configuration
from .encoding.compression import Compression
from .encoding.gelf import encode
from .transport.chunker import RandomSource
from .transport.connection import Connector, Timeouts, connect
from .transport.protocols import DEFAULT_ENDPOINT, Endpoint, Protocol
from .transport.sender import send_payload
from .utils.environment import Clock, HostnameProvider, epoch_millis_timestamp, local_hostname

__all__ = ["LogPanic", "OvhLogs", "dispatcher_for"]

logger = logging.getLogger(__name__)


class LogPanic(RuntimeError):
    """Raised by the ``panic`` helpers once the entry has been sent."""


def dispatcher_for(config: OvhLogsConfig) -> Dispatcher:
    if not config.asynchronous:
        return SyncDispatcher()
    on_error = log_async_error if config.on_error == "log" else None
    return AsyncDispatcher(on_error=on_error)


class OvhLogs:
    """Format entries as GELF and push them to the collector.

    In asynchronous mode :meth:`send` returns as soon as the job is handed to
    a background thread and never raises on a failed delivery.
    """

    def __init__(
        self,
        config: OvhLogsConfig,
        *,
        dispatcher: Dispatcher | None = None,
        connector: Connector = connect,
        clock: Clock = epoch_millis_timestamp,
        hostname: HostnameProvider | None = None,
        random_source: RandomSource = os.urandom,
    ) -> None:
        validate_configuration(config)
        self.config = config
        self.dispatcher = dispatcher or dispatcher_for(config)
        self._connector = connector
        self._clock = clock
        if hostname is None:
            hostname = (lambda: config.defaults.host) if config.defaults.host else local_hostname
        self._hostname = hostname
        self._random_source = random_source

    @classmethod
    def create(
        cls,
        token: str,
        protocol: Protocol | str = Protocol.GELF_UDP,
        compression: Compression | str = Compression.NONE,
        asynchronous: bool = False,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        **kwargs: Any,
    ) -> "OvhLogs":
        """Build a client from plain arguments instead of a loaded config."""

        config = OvhLogsConfig(
            token=token,
            protocol=Protocol.parse(protocol),
            compression=Compression.parse(compression),
            asynchronous=asynchronous,
            on_error="drop",
            endpoint=Endpoint(host=endpoint),
            timeouts=Timeouts(),
            defaults=DefaultsConfig(),
        )
        return cls(config, **kwargs)

    @property
    def protocol(self) -> Protocol:
        return self.config.protocol

    @property
    def compression(self) -> Compression:
        return self.config.compression

    # ------------------------------------------------------------------
    def prepare(self, entry: Entry) -> Entry:
        """Return ``entry`` with client-owned fields set and defaults filled."""

        return entry.with_defaults(
            auth_token=self.config.token,
            clock=self._clock,
            hostname=self._hostname,
        )

    def send(self, entry: Entry) -> None:
        """Send one entry; raises in synchronous mode only."""

        prepared = self.prepare(entry)
        self.dispatcher.dispatch(partial(self._deliver, prepared))

    def _deliver(self, entry: Entry) -> None:
        entry.validate()
        payload = encode(entry, self.config.compression)
        logger.debug("sending %d bytes to %s via %s", len(payload), self.config.endpoint.host, self.config.protocol)
        with self._connector(self.config.protocol, self.config.endpoint, self.config.timeouts) as connection:
            send_payload(payload, self.config.protocol, connection, random_source=self._random_source)

    def close(self, timeout: float | None = None) -> None:
        """Wait for outstanding asynchronous sends."""

        self.dispatcher.close(timeout)

    def __enter__(self) -> "OvhLogs":
        return self

    def __exit__(self, exc_type, exc: BaseException | None, tb) -> None:  # type: ignore[override]
        self.close()

    # -- stdlib ``log`` style helpers ------------------------------------
    def _message(self, full_message: str, level: int | None = None) -> None:
        if level is None:
            level = self.config.defaults.level
        self.send(Entry(full_message=full_message, level=level))

    def print(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args))

    def println(self, *args: Any) -> None:
        self.print(*args)

    def printf(self, fmt: str, *args: Any) -> None:
        self._message(fmt % args if args else fmt)

    def debug(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.DEBUG)

    def info(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.INFO)

    def notice(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.NOTICE)

    def warning(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.WARNING)

    def error(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.ERROR)

    def critical(self, *args: Any) -> None:
        self._message(" ".join(str(arg) for arg in args), SyslogLevel.CRITICAL)

    # Send errors are dropped: the process is going down either way.
    def fatal(self, *args: Any) -> NoReturn:
        self._send_quietly(" ".join(str(arg) for arg in args), SyslogLevel.CRITICAL)
        sys.exit(1)

    def fatalln(self, *args: Any) -> NoReturn:
        self.fatal(*args)

    def fatalf(self, fmt: str, *args: Any) -> NoReturn:
        self._send_quietly(fmt % args if args else fmt, SyslogLevel.CRITICAL)
        sys.exit(1)

    def panic(self, *args: Any) -> NoReturn:
        message = " ".join(str(arg) for arg in args)
        self._send_quietly(message, SyslogLevel.CRITICAL)
        raise LogPanic(message)

    def panicln(self, *args: Any) -> NoReturn:
        self.panic(*args)

    def panicf(self, fmt: str, *args: Any) -> NoReturn:
        message = fmt % args if args else fmt
        self._send_quietly(message, SyslogLevel.CRITICAL)
        raise LogPanic(message)

    def _send_quietly(self, message: str, level: int) -> None:
        try:
            self._message(message, level)
        except Exception:
            logger.debug("dropping send failure before exit", exc_info=True)
        self.close()
