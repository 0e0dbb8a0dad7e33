"""Putting an encoded payload on the wire."""

from __future__ import annotations

import logging
import os

from ..core.errors import ShortWriteError
from .chunker import RandomSource, UDP_CHUNK_MAX_DATA_SIZE, iter_chunks, needs_chunking
from .connection import Connection
from .protocols import Framing, Protocol

__all__ = ["send_payload"]

logger = logging.getLogger(__name__)


def _write_all(connection: Connection, data: bytes) -> None:
    written = connection.write(data)
    if written != len(data):
        raise ShortWriteError(written, len(data))


def send_payload(
    payload: bytes,
    protocol: Protocol,
    connection: Connection,
    *,
    random_source: RandomSource = os.urandom,
    max_data_size: int = UDP_CHUNK_MAX_DATA_SIZE,
) -> None:
    """Write ``payload`` to ``connection`` the way ``protocol`` frames it.

    Stream protocols and small datagrams take one write. Larger datagrams are
    chunked and every frame is written separately; the first short write
    aborts the send, even if earlier frames already left.
    """

    if protocol.framing is Framing.STREAM or not needs_chunking(len(payload)):
        _write_all(connection, payload)
        return

    frames = iter_chunks(payload, max_data_size=max_data_size, random_source=random_source)
    count = 0
    for frame in frames:
        _write_all(connection, frame.to_bytes())
        count += 1
    logger.debug("sent %d bytes as %d GELF chunks", len(payload), count)
