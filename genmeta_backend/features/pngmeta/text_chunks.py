"""
Decode PNG text chunks (tEXt / zTXt / iTXt) into a keyword -> text map.
"""
from __future__ import annotations

import zlib
from collections.abc import Iterable
from typing import Optional

from ...config import MAX_DECOMPRESSED_SIZE
from ...shared import get_logger
from .chunk_reader import Chunk, iter_text_chunks

logger = get_logger(__name__)

_COMPRESSION_ZLIB = 0


class TextChunkError(ValueError):
    """Raised for a text chunk whose layout cannot be decoded."""


def _safe_zlib_decompress(data: bytes, max_size: int = MAX_DECOMPRESSED_SIZE) -> Optional[bytes]:
    """
    Safely decompress zlib data with size limit.
    """
    try:
        decompressor = zlib.decompressobj()
        result = bytearray()

        chunk_size = 81920 # 80KB chunks
        offset = 0

        while offset < len(data):
            chunk = decompressor.decompress(data[offset:offset + chunk_size], max_size + 1 - len(result))
            if chunk:
                result.extend(chunk)
                if len(result) > max_size:
                    return None
            if decompressor.unconsumed_tail:
                # Output cap reached with input left over
                return None
            offset += chunk_size

        chunk = decompressor.flush()
        if chunk:
            result.extend(chunk)

        if not decompressor.eof:
            # Truncated stream
            return None
        if len(result) > max_size:
            return None

        return bytes(result)
    except zlib.error:
        return None


def _split_keyword(payload: bytes) -> tuple[str, bytes]:
    sep = payload.find(b"\x00")
    if sep < 0:
        raise TextChunkError("missing keyword terminator")
    return payload[:sep].decode("latin-1"), payload[sep + 1 :]


def _inflate(data: bytes, method: int) -> bytes:
    if method != _COMPRESSION_ZLIB:
        raise TextChunkError(f"unsupported compression method {method}")
    inflated = _safe_zlib_decompress(data)
    if inflated is None:
        raise TextChunkError("corrupt or oversized compressed text")
    return inflated


def _decode_text(payload: bytes) -> tuple[str, str]:
    keyword, rest = _split_keyword(payload)
    return keyword, rest.decode("latin-1")


def _decode_ztxt(payload: bytes) -> tuple[str, str]:
    keyword, rest = _split_keyword(payload)
    if not rest:
        raise TextChunkError("missing compression method")
    return keyword, _inflate(rest[1:], rest[0]).decode("latin-1")


def _decode_itxt(payload: bytes) -> tuple[str, str]:
    keyword, rest = _split_keyword(payload)
    if len(rest) < 2:
        raise TextChunkError("missing compression flag")
    compressed, method = rest[0], rest[1]
    parts = rest[2:].split(b"\x00", 2)
    if len(parts) != 3:
        raise TextChunkError("missing language tag or translated keyword")
    body = parts[2]
    if compressed:
        body = _inflate(body, method)
    return keyword, body.decode("utf-8")


_DECODERS = {
    "tEXt": _decode_text,
    "zTXt": _decode_ztxt,
    "iTXt": _decode_itxt,
}


def decode_text_chunk(chunk: Chunk) -> tuple[str, str] | None:
    """
    Decode one text chunk into (keyword, text).

    Returns None for non-text chunks and for chunks that fail to decode.
    """
    decoder = _DECODERS.get(chunk.type)
    if decoder is None:
        return None
    try:
        return decoder(chunk.payload)
    except (TextChunkError, UnicodeDecodeError) as exc:
        logger.debug("Skipping malformed %s chunk: %s", chunk.type, exc)
        return None


def build_text_map(chunks: Iterable[Chunk]) -> dict[str, str]:
    """Map keyword -> text over all text chunks; later chunks overwrite earlier ones."""
    text_map: dict[str, str] = {}
    for chunk in iter_text_chunks(chunks):
        decoded = decode_text_chunk(chunk)
        if decoded is None:
            continue
        keyword, text = decoded
        if not keyword:
            continue
        text_map[keyword] = text
    return text_map
