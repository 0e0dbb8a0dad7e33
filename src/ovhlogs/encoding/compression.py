"""Payload compression modes supported by GELF inputs."""

from __future__ import annotations

import gzip
import zlib
from enum import Enum

from ..core.errors import EncodingError, UnsupportedCompressionError

__all__ = ["Compression", "compress"]


class Compression(Enum):
    NONE = "none"
    GZIP = "gzip"
    ZLIB = "zlib"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "Compression | str | None") -> "Compression":
        """Resolve ``value`` to a member, raising on anything unknown."""

        if isinstance(value, Compression):
            return value
        if value is None:
            return cls.NONE
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedCompressionError(f"{value!r} compression not supported")


def compress(data: bytes, compression: Compression | str | None) -> bytes:
    """Run ``data`` through the compressor selected by ``compression``."""

    mode = Compression.parse(compression)
    try:
        if mode is Compression.GZIP:
            return gzip.compress(data, mtime=0)
        if mode is Compression.ZLIB:
            compressor = zlib.compressobj()
            return compressor.compress(data) + compressor.flush()
    except (zlib.error, TypeError) as exc:
        raise EncodingError(f"failed to {mode} compress payload, {exc}") from exc
    return data
