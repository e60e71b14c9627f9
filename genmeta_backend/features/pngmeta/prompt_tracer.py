"""
Positive/negative prompt extraction from a canonical workflow graph.

Two passes run over the same graph:

1. Sampler wiring: the first node whose inputs carry a positive/negative
   conditioning pair that resolves to text wins.
2. Text encoders: every `CLIPTextEncode` node is classified by its title and
   its text, so graphs without a recognisable sampler still yield prompts.

Texts consumed by the first pass are not classified again by the second.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .graph_converter import GraphNode, NodeRef, WorkflowGraph
from .role_classifier import looks_negative

POSITIVE_INPUT_KEYS: tuple[str, ...] = ("positive", "positive_conditioning", "positive_cond")
NEGATIVE_INPUT_KEYS: tuple[str, ...] = ("negative", "negative_conditioning", "negative_cond")
TEXT_ENCODER_CLASS_TYPES: frozenset[str] = frozenset({"CLIPTextEncode"})


@dataclass
class PromptTexts:
    positive: list[str] = field(default_factory=list)
    negative: list[str] = field(default_factory=list)
    consumed_ids: set[str] = field(default_factory=set)

    def add(self, text: str | None, negative: bool) -> bool:
        if not text:
            return False
        bucket = self.negative if negative else self.positive
        if text not in bucket:
            bucket.append(text)
        return True

    def joined_positive(self) -> str:
        return ", ".join(self.positive).strip()

    def joined_negative(self) -> str:
        return ", ".join(self.negative).strip()


def _first_present(ins: dict[str, Any], keys: tuple[str, ...]) -> Any | None:
    for key in keys:
        value = ins.get(key)
        if value is not None:
            return value
    return None


def _resolve_into(graph: WorkflowGraph, raw_ref: Any, out: PromptTexts, negative: bool) -> bool:
    ref = NodeRef.parse(raw_ref) if raw_ref is not None else None
    if ref is None:
        return False
    if not out.add(ref.resolve(graph), negative):
        return False
    out.consumed_ids.add(ref.node_id)
    return True


def extract_sampler_prompts(graph: WorkflowGraph, out: PromptTexts | None = None) -> PromptTexts:
    out = out if out is not None else PromptTexts()
    for node in graph:
        ins = node.inputs
        pos_ref = _first_present(ins, POSITIVE_INPUT_KEYS)
        neg_ref = _first_present(ins, NEGATIVE_INPUT_KEYS)
        if pos_ref is None and neg_ref is None:
            continue
        found_pos = _resolve_into(graph, pos_ref, out, negative=False)
        found_neg = _resolve_into(graph, neg_ref, out, negative=True)
        if found_pos or found_neg:
            break
    return out


def _is_text_encoder(node: GraphNode) -> bool:
    return node.class_type in TEXT_ENCODER_CLASS_TYPES


def extract_text_encoder_prompts(graph: WorkflowGraph, out: PromptTexts | None = None) -> PromptTexts:
    out = out if out is not None else PromptTexts()
    for node in graph:
        if not _is_text_encoder(node):
            continue
        if node.id is not None and node.id in out.consumed_ids:
            continue
        text = node.text
        if text:
            out.add(text, negative=looks_negative(text, node.title))
    return out


def extract_prompts(graph: WorkflowGraph) -> PromptTexts:
    out = extract_sampler_prompts(graph)
    return extract_text_encoder_prompts(graph, out)
