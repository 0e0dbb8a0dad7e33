"""GELF serialisation of entries."""

from __future__ import annotations

import json
from typing import Any, Dict

from ..core.entry import Entry
from ..core.errors import EncodingError
from .compression import Compression, compress

__all__ = ["TOKEN_FIELD", "encode", "to_gelf_dict"]

TOKEN_FIELD = "_X-OVH-TOKEN"


def to_gelf_dict(entry: Entry) -> Dict[str, Any]:
    """Map ``entry`` onto the GELF field names."""

    payload: Dict[str, Any] = {
        "version": entry.version,
        "host": entry.host,
        "short_message": entry.short_message,
        "full_message": entry.full_message,
        "time_stamp": entry.timestamp,
        "level": int(entry.level),
    }
    if entry.line is not None:
        payload["line"] = entry.line
    for key, value in entry.additional_fields.items():
        payload[f"_{key}"] = value
    payload[TOKEN_FIELD] = entry.auth_token
    return payload


def encode(entry: Entry, compression: Compression | str | None = Compression.NONE) -> bytes:
    """Serialise ``entry`` to GELF JSON bytes, compressed as requested."""

    mode = Compression.parse(compression)
    try:
        data = json.dumps(to_gelf_dict(entry), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to marshal entry to JSON, {exc}") from exc
    return compress(data, mode)
