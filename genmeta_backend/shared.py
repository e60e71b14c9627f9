"""Backend-facing alias for shared utilities."""

from __future__ import annotations

from genmeta_shared import (
    ErrorCode,
    Result,
    get_logger,
    log_structured,
    request_id_var,
    sanitize_error_message,
    timer,
)

__all__ = [
    "ErrorCode",
    "Result",
    "get_logger",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
    "timer",
]
