"""
Route handlers.
"""
from .pngmeta import APP_KEY_PNGMETA_SERVICE, register_pngmeta_routes

__all__ = [
    "APP_KEY_PNGMETA_SERVICE",
    "register_pngmeta_routes",
]
