"""GELF UDP chunking.

A payload that does not fit in one datagram is cut into frames laid out as::

    [0x1e 0x0f][message id: 8 bytes][sequence: 1 byte][total: 1 byte][data]

All frames of one payload share the message id; the collector reassembles
them from the id, the sequence number and the total count.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Iterator, List

from ..core.errors import PayloadTooLargeError, RandomnessError

__all__ = [
    "GELF_CHUNK_MAGIC_BYTES",
    "GELF_MAX_CHUNKS",
    "MESSAGE_ID_SIZE",
    "UDP_CHUNK_HEADER_SIZE",
    "UDP_CHUNK_MAX_DATA_SIZE",
    "UDP_CHUNK_MAX_SIZE",
    "UDP_CHUNK_MAX_SIZE_FRAG",
    "ChunkFrame",
    "RandomSource",
    "chunk_count",
    "iter_chunks",
    "needs_chunking",
    "new_message_id",
    "split_payload",
]

RandomSource = Callable[[int], bytes]

GELF_CHUNK_MAGIC_BYTES = b"\x1e\x0f"
MESSAGE_ID_SIZE = 8
UDP_CHUNK_HEADER_SIZE = len(GELF_CHUNK_MAGIC_BYTES) + MESSAGE_ID_SIZE + 1 + 1
# Largest datagram when the network fragments (not used for sizing).
UDP_CHUNK_MAX_SIZE_FRAG = 8192
UDP_CHUNK_MAX_SIZE = 1420
UDP_CHUNK_MAX_DATA_SIZE = 1348
GELF_MAX_CHUNKS = 128


@dataclass(frozen=True, slots=True)
class ChunkFrame:
    message_id: bytes
    sequence: int
    total: int
    data: bytes

    def to_bytes(self) -> bytes:
        return b"".join(
            (
                GELF_CHUNK_MAGIC_BYTES,
                self.message_id,
                bytes((self.sequence, self.total)),
                self.data,
            )
        )


def needs_chunking(payload_size: int) -> bool:
    """Whether a payload of ``payload_size`` bytes must go out as chunks."""

    return payload_size >= UDP_CHUNK_MAX_SIZE


def chunk_count(payload_size: int, max_data_size: int = UDP_CHUNK_MAX_DATA_SIZE) -> int:
    """Number of chunks needed to carry ``payload_size`` bytes."""

    if max_data_size <= 0:
        raise ValueError("max_data_size must be positive")
    return -(-payload_size // max_data_size)


def new_message_id(random_source: RandomSource = os.urandom) -> bytes:
    """Draw a fresh 8-byte message id from ``random_source``."""

    try:
        message_id = random_source(MESSAGE_ID_SIZE)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessError(f"unable to generate msgID, {exc}") from exc
    if len(message_id) < MESSAGE_ID_SIZE:
        raise RandomnessError(
            f"unable to generate msgID, got {len(message_id)}/{MESSAGE_ID_SIZE} random bytes"
        )
    return bytes(message_id[:MESSAGE_ID_SIZE])


def iter_chunks(
    payload: bytes,
    *,
    max_data_size: int = UDP_CHUNK_MAX_DATA_SIZE,
    random_source: RandomSource = os.urandom,
) -> Iterator[ChunkFrame]:
    """Yield the frames for ``payload`` in sequence order.

    The message id is drawn and the chunk limit enforced before the first
    frame is produced, so nothing is yielded for a payload that cannot be sent.
    """

    message_id = new_message_id(random_source)
    total = chunk_count(len(payload), max_data_size)
    if total > GELF_MAX_CHUNKS:
        raise PayloadTooLargeError(
            f"payload of {len(payload)} bytes needs {total} chunks, GELF allows {GELF_MAX_CHUNKS}"
        )
    return _frames(payload, message_id, total, max_data_size)


def _frames(payload: bytes, message_id: bytes, total: int, max_data_size: int) -> Iterator[ChunkFrame]:
    view = memoryview(payload)
    for sequence in range(total):
        start = sequence * max_data_size
        yield ChunkFrame(
            message_id=message_id,
            sequence=sequence,
            total=total,
            data=bytes(view[start : start + max_data_size]),
        )


def split_payload(
    payload: bytes,
    *,
    max_data_size: int = UDP_CHUNK_MAX_DATA_SIZE,
    random_source: RandomSource = os.urandom,
) -> List[bytes]:
    """Return the encoded frames for ``payload``."""

    return [frame.to_bytes() for frame in iter_chunks(payload, max_data_size=max_data_size, random_source=random_source)]
