"""
PNG generation-metadata extraction: entry points.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from ...adapters.byte_source import ByteSource, FetchError, FetchTimeoutError, resolve_byte_source
from ...shared import ErrorCode, Result, get_logger, log_structured, sanitize_error_message, timer
from .chunk_reader import read_chunks
from .composer import compose_metadata
from .record import ExtractedMetadata
from .text_chunks import build_text_map

logger = get_logger(__name__)

PNG_SUFFIX = ".png"


def is_png_source(src: Any) -> bool:
    return isinstance(src, str) and src.lower().endswith(PNG_SUFFIX)


def extract_png_metadata(src: str, data: bytes) -> ExtractedMetadata:
    """Pure bytes -> record transform. Never raises on malformed image data."""
    if not is_png_source(src):
        return ExtractedMetadata(src=src)
    with timer("png metadata extraction", logger):
        text_map = build_text_map(read_chunks(data))
        return compose_metadata(src, text_map)


async def enrich_png_meta(src: str, source: Optional[ByteSource] = None) -> ExtractedMetadata:
    """
    Fetch `src` and extract its generation metadata.

    Non-PNG sources return `{src}` without fetching. Fetch failures propagate
    as `FetchError`; no partial record is produced.
    """
    if not is_png_source(src):
        return ExtractedMetadata(src=src)
    source = source if source is not None else resolve_byte_source(src)
    data = await source.fetch(src)
    return extract_png_metadata(src, data)


class PngMetadataService:
    """Result-returning wrapper around `enrich_png_meta` for route handlers."""

    def __init__(self, source: Optional[ByteSource] = None):
        self._source = source

    async def get_metadata(self, src: str) -> Result[dict[str, Any]]:
        if not isinstance(src, str) or not src.strip():
            return Result.Err(ErrorCode.INVALID_INPUT, "Missing image source")
        src = src.strip()
        try:
            record = await enrich_png_meta(src, self._source)
        except (FetchTimeoutError, asyncio.TimeoutError) as exc:
            logger.debug("Timed out fetching %s: %s", src, exc)
            return Result.Err(ErrorCode.TIMEOUT, sanitize_error_message(exc, "Timed out fetching image"))
        except FetchError as exc:
            logger.debug("Failed to fetch %s: %s", src, exc)
            return Result.Err(ErrorCode.FETCH_FAILED, sanitize_error_message(exc, "Failed to fetch image"))
        payload = record.to_dict()
        log_structured(
            logger,
            logging.DEBUG,
            "png metadata extracted",
            src=src,
            fields=sorted(k for k in payload if k != "src"),
        )
        return Result.Ok(payload, parsed=is_png_source(src))
