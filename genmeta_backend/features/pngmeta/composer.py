"""
Merge graph analysis and flat-text parameters into the final record.
"""

from __future__ import annotations

from collections.abc import Mapping

from .analyzer import PARAMETERS_KEYWORDS, analyze_text_map, first_present, looks_like_json
from .parameters import has_negative_marker, split_combined_prompts
from .record import ExtractedMetadata

# Raw `prompt` falls back to the A1111 `parameters` block
RAW_PROMPT_KEYWORDS: tuple[str, ...] = ("prompt", "Prompt", "parameters")


def _drop_json(value: str | None) -> str | None:
    if value is None or looks_like_json(value):
        return None
    return value


def compose_metadata(src: str, text_map: Mapping[str, str]) -> ExtractedMetadata:
    prompt = first_present(text_map, RAW_PROMPT_KEYWORDS)
    parameters = first_present(text_map, PARAMETERS_KEYWORDS)

    analysis = analyze_text_map(text_map)
    if analysis.positive:
        prompt = analysis.positive
    if not parameters and analysis.negative:
        parameters = analysis.negative

    # Raw graph JSON never reaches the flat-text split
    prompt = _drop_json(prompt)
    parameters = _drop_json(parameters)

    if prompt and (not parameters or has_negative_marker(prompt)):
        positive, negative = split_combined_prompts(prompt)
        prompt = positive
        if not parameters and negative:
            parameters = negative
    if parameters and has_negative_marker(parameters):
        _, negative = split_combined_prompts(parameters)
        parameters = negative or parameters

    return ExtractedMetadata(
        src=src,
        prompt=_drop_json(prompt) or None,
        parameters=_drop_json(parameters) or None,
        checkpoint=analysis.checkpoint,
        loras=tuple(analysis.loras),
    )
