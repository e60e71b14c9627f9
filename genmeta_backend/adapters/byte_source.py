"""
Byte sources: fetch the raw image bytes behind a source identifier.

HTTP(S) URLs are fetched with aiohttp; anything else is read from the local
filesystem. Every failure surfaces as `FetchError`.
"""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import unquote, urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from ..config import FETCH_TIMEOUT_SECONDS, MAX_IMAGE_BYTES
from ..shared import get_logger

logger = get_logger(__name__)

_HTTP_SCHEMES = frozenset({"http", "https"})
_READ_CHUNK_SIZE = 64 * 1024


class FetchError(RuntimeError):
    """The byte source could not deliver the image bytes."""


class FetchTimeoutError(FetchError):
    """The byte source did not answer within the configured timeout."""


class ByteSource(Protocol):
    async def fetch(self, src: str) -> bytes: ...


def is_http_source(src: str) -> bool:
    return urlsplit(str(src or "")).scheme.lower() in _HTTP_SCHEMES


class HttpByteSource:
    """
    Fetch bytes over HTTP(S).

    Pass a `session` to reuse a connection pool; otherwise each fetch opens
    and closes its own `ClientSession`.
    """

    def __init__(
        self,
        session: Optional[ClientSession] = None,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        max_bytes: int = MAX_IMAGE_BYTES,
    ):
        self._session = session
        self._timeout = timeout
        self._max_bytes = max_bytes

    async def fetch(self, src: str) -> bytes:
        if self._session is not None:
            return await self._fetch_with(self._session, src)
        async with ClientSession() as session:
            return await self._fetch_with(session, src)

    async def _fetch_with(self, session: ClientSession, src: str) -> bytes:
        try:
            async with session.get(
                src,
                headers={"Cache-Control": "no-cache"},
                timeout=ClientTimeout(total=self._timeout),
            ) as resp:
                if resp.status != 200:
                    raise FetchError(f"GET {src} returned HTTP {resp.status}")
                if resp.content_length is not None and resp.content_length > self._max_bytes:
                    raise FetchError(f"GET {src} body of {resp.content_length} bytes exceeds {self._max_bytes}")
                return await self._read_limited(resp, src)
        except asyncio.TimeoutError as exc:
            raise FetchTimeoutError(f"Timed out after {self._timeout}s fetching {src}") from exc
        except ClientError as exc:
            raise FetchError(f"Failed to fetch {src}: {exc}") from exc

    async def _read_limited(self, resp, src: str) -> bytes:
        buf = bytearray()
        async for chunk in resp.content.iter_chunked(_READ_CHUNK_SIZE):
            buf.extend(chunk)
            if len(buf) > self._max_bytes:
                raise FetchError(f"GET {src} body exceeds {self._max_bytes} bytes")
        return bytes(buf)


class FileByteSource:
    """Read bytes from a local path (or a `file://` URL)."""

    def __init__(self, max_bytes: int = MAX_IMAGE_BYTES):
        self._max_bytes = max_bytes

    async def fetch(self, src: str) -> bytes:
        return await asyncio.to_thread(self._read, src)

    def _read(self, src: str) -> bytes:
        path = _local_path(src)
        try:
            size = path.stat().st_size
            if size > self._max_bytes:
                raise FetchError(f"{path} is {size} bytes, limit is {self._max_bytes}")
            return path.read_bytes()
        except OSError as exc:
            raise FetchError(f"Failed to read {path}: {exc}") from exc


def _local_path(src: str) -> Path:
    parts = urlsplit(src)
    if parts.scheme.lower() == "file":
        return Path(unquote(parts.path))
    return Path(src)


def resolve_byte_source(src: str) -> ByteSource:
    if is_http_source(src):
        return HttpByteSource()
    return FileByteSource()
