"""
Workflow graph analysis over the JSON-shaped values of a PNG text map.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...config import MAX_METADATA_JSON_SIZE
from ...shared import get_logger
from .graph_converter import GraphEncoding, WorkflowGraph
from .model_scanner import ModelScan
from .prompt_tracer import PromptTexts, extract_prompts

logger = get_logger(__name__)

# Candidate sources, highest priority first
WORKFLOW_KEYWORDS: tuple[str, ...] = ("workflow", "sd-metadata", "comfyui.workflow")
PROMPT_KEYWORDS: tuple[str, ...] = ("prompt", "Prompt")
PARAMETERS_KEYWORDS: tuple[str, ...] = ("parameters", "Parameters")

_JSON_SHAPED_RE = re.compile(r"^\s*[\{\[]")


@dataclass
class GraphAnalysis:
    positive: str = ""
    negative: str = ""
    checkpoint: str | None = None
    loras: list[str] = field(default_factory=list)
    candidates: int = 0
    graphs: list[GraphEncoding] = field(default_factory=list)


def looks_like_json(value: Any) -> bool:
    return isinstance(value, str) and _JSON_SHAPED_RE.match(value) is not None


def first_present(text_map: Mapping[str, str], keywords: tuple[str, ...]) -> str | None:
    """First non-empty value among `keywords`, in order."""
    for keyword in keywords:
        value = text_map.get(keyword)
        if value:
            return value
    return None


def select_json_candidates(text_map: Mapping[str, str]) -> list[str]:
    ordered = [
        first_present(text_map, WORKFLOW_KEYWORDS),
        *(text_map.get(k) for k in PROMPT_KEYWORDS),
        *(text_map.get(k) for k in PARAMETERS_KEYWORDS),
    ]
    out: list[str] = []
    for value in ordered:
        if looks_like_json(value) and value not in out:
            out.append(value)
    return out


def parse_candidate(text: str) -> Any | None:
    if len(text) > MAX_METADATA_JSON_SIZE:
        logger.debug("Skipping JSON candidate of %s chars (limit %s)", len(text), MAX_METADATA_JSON_SIZE)
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.debug("Skipping malformed JSON candidate: %s", exc)
        return None


def analyze_text_map(text_map: Mapping[str, str]) -> GraphAnalysis:
    """
    Try each JSON candidate in priority order.

    Prompts come from the first candidate that yields a positive prompt (or,
    failing that, the first that yields a negative one). Checkpoint and LoRA
    names accumulate over every candidate evaluated.
    """
    analysis = GraphAnalysis()
    models = ModelScan()
    chosen: PromptTexts | None = None
    negative_only: PromptTexts | None = None

    for candidate in select_json_candidates(text_map):
        analysis.candidates += 1
        parsed = parse_candidate(candidate)
        if parsed is None:
            continue
        graph = WorkflowGraph.from_json(parsed)
        analysis.graphs.append(graph.encoding)
        models.update(graph)
        texts = extract_prompts(graph)
        if texts.positive:
            chosen = texts
            break
        if texts.negative and negative_only is None:
            negative_only = texts

    chosen = chosen or negative_only
    if chosen is not None:
        analysis.positive = chosen.joined_positive()
        analysis.negative = chosen.joined_negative()
    analysis.checkpoint = models.checkpoint
    analysis.loras = models.loras
    return analysis
