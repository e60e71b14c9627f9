"""
HTTP routes (aiohttp).
"""
from .registry import build_app, register_all_routes

__all__ = ["build_app", "register_all_routes"]
