"""
PNG generation-metadata endpoint.
"""
from __future__ import annotations

import uuid

from aiohttp import web

from genmeta_backend.adapters.byte_source import is_http_source
from genmeta_backend.features.pngmeta import PngMetadataService
from genmeta_backend.shared import ErrorCode, Result, get_logger, request_id_var
from ..core import _json_response, safe_error_message

logger = get_logger(__name__)

APP_KEY_PNGMETA_SERVICE: web.AppKey[PngMetadataService] = web.AppKey("genmeta_pngmeta_service", PngMetadataService)


def _get_service(request: web.Request) -> PngMetadataService:
    service = request.app.get(APP_KEY_PNGMETA_SERVICE)
    return service if service is not None else PngMetadataService()


def register_pngmeta_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/genmeta/png-meta")
    async def get_png_meta(request: web.Request) -> web.Response:
        token = request_id_var.set(request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8])
        try:
            src = (request.query.get("src") or "").strip()
            if not src:
                return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "Missing 'src' query parameter"))
            # Local paths are never read on behalf of HTTP clients
            if not is_http_source(src):
                return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "Only http(s) image sources are accepted"))
            try:
                result = await _get_service(request).get_metadata(src)
            except Exception as exc:
                logger.exception("Unexpected failure extracting metadata for %s", src)
                return _json_response(
                    Result.Err(ErrorCode.EXTRACTION_FAILED, safe_error_message(exc, "Metadata extraction failed")),
                    status=500,
                )
            return _json_response(result)
        finally:
            request_id_var.reset(token)
