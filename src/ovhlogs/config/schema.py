"""Configuration schema definition for ovhlogs."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..core.levels import SyslogLevel, ensure_level
from ..encoding.compression import Compression
from ..transport.connection import Timeouts
from ..transport.protocols import DEFAULT_ENDPOINT, Endpoint, Protocol

DEFAULT_CONFIG: Dict[str, Any] = {
    "client": {
        "token": "",
        "protocol": "udp",
        "compression": "none",
        "async": False,
        "on_error": "drop",
    },
    "endpoint": {
        "host": DEFAULT_ENDPOINT,
        "port": Protocol.GELF_UDP.default_port,
        "tls_port": Protocol.GELF_TLS.default_port,
    },
    "timeouts": {
        "connect_s": 5.0,
        "write_s": 10.0,
    },
    "defaults": {
        "host": "",
        "level": "INFO",
    },
}

ON_ERROR_POLICIES = ("drop", "log")


def default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration mapping."""

    return deepcopy(DEFAULT_CONFIG)


@dataclass(frozen=True, slots=True)
class DefaultsConfig:
    host: str = ""
    level: SyslogLevel = SyslogLevel.INFO


@dataclass(frozen=True, slots=True)
class OvhLogsConfig:
    token: str
    protocol: Protocol
    compression: Compression
    asynchronous: bool
    on_error: str
    endpoint: Endpoint
    timeouts: Timeouts
    defaults: DefaultsConfig
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    return value if isinstance(value, Mapping) else {}


def _optional_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    return int(value)


def _to_endpoint(data: Mapping[str, Any]) -> Endpoint:
    return Endpoint(
        host=str(data.get("host", DEFAULT_ENDPOINT)),
        port=_optional_int(data.get("port")),
        tls_port=_optional_int(data.get("tls_port")),
    )


def _to_timeouts(data: Mapping[str, Any]) -> Timeouts:
    return Timeouts(
        connect_s=float(data.get("connect_s", 5.0)),
        write_s=float(data.get("write_s", 10.0)),
    )


def _to_defaults(data: Mapping[str, Any]) -> DefaultsConfig:
    return DefaultsConfig(
        host=str(data.get("host") or ""),
        level=ensure_level(data.get("level", "INFO")),
    )


def build_config(data: Mapping[str, Any]) -> OvhLogsConfig:
    client = _section(data, "client")
    return OvhLogsConfig(
        token=str(client.get("token") or ""),
        protocol=Protocol.parse(client.get("protocol", "udp")),
        compression=Compression.parse(client.get("compression", "none")),
        asynchronous=bool(client.get("async", False)),
        on_error=str(client.get("on_error", "drop")).lower(),
        endpoint=_to_endpoint(_section(data, "endpoint")),
        timeouts=_to_timeouts(_section(data, "timeouts")),
        defaults=_to_defaults(_section(data, "defaults")),
        raw=deepcopy({k: v for k, v in data.items()}),
    )
