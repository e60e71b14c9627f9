"""
Route registration.
"""

from __future__ import annotations

from typing import Optional

from aiohttp import web

from genmeta_backend.features.pngmeta import PngMetadataService
from .handlers import APP_KEY_PNGMETA_SERVICE, register_pngmeta_routes


def register_all_routes(routes: web.RouteTableDef) -> web.RouteTableDef:
    register_pngmeta_routes(routes)
    return routes


def build_app(service: Optional[PngMetadataService] = None) -> web.Application:
    app = web.Application()
    app[APP_KEY_PNGMETA_SERVICE] = service if service is not None else PngMetadataService()
    app.add_routes(register_all_routes(web.RouteTableDef()))
    return app
