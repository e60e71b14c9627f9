"""Adapters for external collaborators (byte sources)."""
from .byte_source import (
    ByteSource,
    FetchError,
    FetchTimeoutError,
    FileByteSource,
    HttpByteSource,
    resolve_byte_source,
)

__all__ = [
    "ByteSource",
    "FetchError",
    "FetchTimeoutError",
    "FileByteSource",
    "HttpByteSource",
    "resolve_byte_source",
]
