"""
Broadcast fragment framing.

Fragment structure:
- Repeated chunk records until the buffer ends:
  - command     (varint, compression bit 0x40 folded in)
  - tick        (uint32, little-endian)
  - reserved    (1 byte)
  - size        (uint32, little-endian)
  - payload     (size bytes, raw snappy when the compression bit is set)

Compressed payloads are inflated here; a payload that fails to inflate is
kept as stored and the failure is recorded on the chunk.
"""
import logging
import os
import struct
from typing import Iterator, Optional, Tuple

import snappy

from demo_models.chunk import Chunk, Fragment

from .exceptions import FragmentFormatError

logger = logging.getLogger(__name__)

DEM_IS_COMPRESSED = 0x40
CHUNK_FIXED_HEADER = 9  # tick + reserved + size
MAX_VARINT32_BYTES = 5


def _read_varint32(data: bytes, pos: int) -> Tuple[int, int]:
    result = 0
    for i in range(MAX_VARINT32_BYTES):
        if pos >= len(data):
            raise FragmentFormatError(f"Truncated command varint at offset {pos}")
        b = data[pos]
        pos += 1
        result |= (b & 0x7F) << (7 * i)
        if not b & 0x80:
            return result & 0xFFFFFFFF, pos
    raise FragmentFormatError(f"Command varint at offset {pos - MAX_VARINT32_BYTES} is too long")


def decompress_payload(stored: bytes) -> Tuple[bytes, Optional[str]]:
    """
    Inflate a raw snappy payload.

    Returns (payload, error). On failure the stored bytes come back unchanged
    together with the error message.
    """
    if not stored:
        return stored, None
    try:
        return snappy.uncompress(stored), None
    except snappy.UncompressError as e:
        return stored, f"Snappy decompression failed: {e}"


def iter_chunks(buffer: bytes) -> Iterator[Chunk]:
    """Yield chunks in fragment order. Raises FragmentFormatError on truncated framing."""
    data = bytes(buffer)
    pos = 0
    index = 0
    while pos < len(data):
        start = pos
        raw_command, pos = _read_varint32(data, pos)
        if pos + CHUNK_FIXED_HEADER > len(data):
            raise FragmentFormatError(
                f"Chunk {index} header at offset {start} truncated "
                f"({len(data) - pos} of {CHUNK_FIXED_HEADER} bytes)"
            )
        tick = struct.unpack_from("<I", data, pos)[0]
        stored_size = struct.unpack_from("<I", data, pos + 5)[0]
        pos += CHUNK_FIXED_HEADER

        if pos + stored_size > len(data):
            raise FragmentFormatError(
                f"Chunk {index} declares {stored_size} payload bytes but only "
                f"{len(data) - pos} remain"
            )
        payload = data[pos:pos + stored_size]
        pos += stored_size

        is_compressed = bool(raw_command & DEM_IS_COMPRESSED)
        error = None
        if is_compressed:
            payload, error = decompress_payload(payload)
            if error:
                logger.warning("chunk %d: %s", index, error)

        chunk = Chunk(
            index=index,
            command=raw_command & ~DEM_IS_COMPRESSED,
            is_compressed=is_compressed,
            raw_command=raw_command,
            size=len(payload),
            payload=payload,
            tick=tick,
            stored_size=stored_size,
            error=error,
        )
        logger.debug("chunk %d: command=%d size=%d stored=%d tick=%d compressed=%s",
                     index, chunk.command, chunk.size, stored_size, tick, is_compressed)
        yield chunk
        index += 1


def parse_fragment(buffer: bytes) -> Fragment:
    """Frame an entire fragment buffer."""
    return Fragment(size=len(buffer), chunks=tuple(iter_chunks(buffer)))


def load_fragment_file(filepath: str) -> bytes:
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Fragment file not found: {filepath}")
    with open(filepath, 'rb') as f:
        return f.read()
