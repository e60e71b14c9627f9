"""Shared utilities for genmeta."""
from .errors import sanitize_error_message
from .log import get_logger, log_structured, request_id_var
from .result import Result
from .time import timer
from .types import ErrorCode

__all__ = [
    "Result",
    "get_logger",
    "timer",
    "ErrorCode",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
]
