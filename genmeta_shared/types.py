"""
Shared types, enums, and constants.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"

    # Byte source
    FETCH_FAILED = "FETCH_FAILED"
    TIMEOUT = "TIMEOUT"

    # Server
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
