"""
Generation metadata extraction for AI-generated PNG images.

Pipeline: chunk reader -> text map -> workflow graph analysis + model scan ->
flat-text parameter split -> composed record.
"""
from .record import ExtractedMetadata
from .service import PngMetadataService, enrich_png_meta, extract_png_metadata, is_png_source

__all__ = [
    "ExtractedMetadata",
    "PngMetadataService",
    "enrich_png_meta",
    "extract_png_metadata",
    "is_png_source",
]
