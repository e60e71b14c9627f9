"""
Core utilities for route handlers.
"""
from .response import _json_response, safe_error_message

__all__ = [
    "_json_response",
    "safe_error_message",
]
