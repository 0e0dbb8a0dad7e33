"""Configuration validation helpers."""

from __future__ import annotations

from ..config.schema import ON_ERROR_POLICIES, OvhLogsConfig
from .errors import ConfigurationError

__all__ = ["ConfigurationError", "validate_configuration"]


def validate_configuration(config: OvhLogsConfig) -> None:
    """Ensure configuration values are usable before any send happens."""

    if not config.token:
        raise ConfigurationError(
            "A stream token is required (client.token, OVHLOGS__CLIENT__TOKEN or OVHLOGS_TOKEN)"
        )

    if not config.endpoint.host:
        raise ConfigurationError("Endpoint host must not be empty")

    for name, port in (("port", config.endpoint.port), ("tls_port", config.endpoint.tls_port)):
        if port is not None and not 0 < port < 65536:
            raise ConfigurationError(f"Endpoint {name} out of range: {port}")

    if config.timeouts.connect_s <= 0:
        raise ConfigurationError(f"Connect timeout must be positive, got {config.timeouts.connect_s}")
    if config.timeouts.write_s <= 0:
        raise ConfigurationError(f"Write timeout must be positive, got {config.timeouts.write_s}")

    if config.on_error not in ON_ERROR_POLICIES:
        raise ConfigurationError(
            f"Unknown on_error policy '{config.on_error}', expected one of {', '.join(ON_ERROR_POLICIES)}"
        )
