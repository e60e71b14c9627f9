"""
PNG chunk reader.

Splits an in-memory PNG into its length/type/payload/CRC records. Never raises
on malformed input: a bad signature yields no chunks, a truncated record ends
the walk, and a record with a mismatching CRC is skipped.
"""
from __future__ import annotations

import struct
import zlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ...config import VERIFY_CHUNK_CRC
from ...shared import get_logger

logger = get_logger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_HEADER = struct.Struct(">I4s")
_CRC_SIZE = 4

# Chunk types that carry keyword/text pairs
TEXT_CHUNK_TYPES: frozenset[str] = frozenset({"tEXt", "zTXt", "iTXt"})


@dataclass(frozen=True)
class Chunk:
    type: str
    payload: bytes

    @property
    def is_text(self) -> bool:
        return self.type in TEXT_CHUNK_TYPES


def has_png_signature(data: bytes) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview)) and bytes(data[:8]) == PNG_SIGNATURE


def read_chunks(data: bytes, verify_crc: bool = VERIFY_CHUNK_CRC) -> list[Chunk]:
    """Return every chunk of `data` in file order, or [] if it is not a PNG."""
    if not has_png_signature(data):
        return []
    return list(_iter_chunks(bytes(data), verify_crc))


def _iter_chunks(data: bytes, verify_crc: bool) -> Iterator[Chunk]:
    offset = len(PNG_SIGNATURE)
    total = len(data)
    while offset + _HEADER.size <= total:
        length, raw_type = _HEADER.unpack_from(data, offset)
        payload_start = offset + _HEADER.size
        payload_end = payload_start + length
        if payload_end + _CRC_SIZE > total:
            logger.debug("Truncated PNG chunk at offset %s (declared length %s)", offset, length)
            return
        offset = payload_end + _CRC_SIZE

        chunk_type = raw_type.decode("latin-1")
        payload = data[payload_start:payload_end]
        if verify_crc and not _crc_matches(raw_type, payload, data[payload_end:offset]):
            logger.debug("Skipping PNG chunk %r with bad CRC", chunk_type)
            continue

        yield Chunk(type=chunk_type, payload=payload)
        if chunk_type == "IEND":
            return


def _crc_matches(raw_type: bytes, payload: bytes, crc_bytes: bytes) -> bool:
    expected = struct.unpack(">I", crc_bytes)[0]
    return (zlib.crc32(raw_type + payload) & 0xFFFFFFFF) == expected


def iter_text_chunks(chunks: Iterable[Chunk]) -> Iterator[Chunk]:
    for chunk in chunks:
        if chunk.is_text:
            yield chunk
