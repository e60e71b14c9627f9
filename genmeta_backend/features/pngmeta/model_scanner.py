"""
Checkpoint and LoRA discovery by pattern-matching serialized graph nodes.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

from .graph_converter import GraphNode, WorkflowGraph

# A JSON string literal body, escapes included
_JSON_STR = r'"((?:[^"\\]|\\.)+)"'

# Applied in order; the first pattern that matches on the first matching node wins
CHECKPOINT_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf'"{key}"\s*:\s*{_JSON_STR}', re.IGNORECASE)
    for key in ("ckpt_name", "model", "checkpoint", "model_name")
)

LORA_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf'"lora[_\s]?name"\s*:\s*{_JSON_STR}', re.IGNORECASE),
    re.compile(rf'"lora"\s*:\s*{_JSON_STR}', re.IGNORECASE),
)


@dataclass
class ModelScan:
    checkpoint: str | None = None
    loras: list[str] = field(default_factory=list)

    def add_lora(self, name: str) -> None:
        if name and not _contains_casefold(self.loras, name):
            self.loras.append(name)

    def update(self, graph: WorkflowGraph) -> ModelScan:
        for node in graph:
            text = serialize_node(node)
            if self.checkpoint is None:
                self.checkpoint = match_checkpoint(text)
            for name in match_loras(text):
                self.add_lora(name)
        return self


def _contains_casefold(names: list[str], name: str) -> bool:
    folded = name.casefold()
    return any(n.casefold() == folded for n in names)


def serialize_node(node: GraphNode) -> str:
    return json.dumps(node.data, ensure_ascii=False, default=str)


def _unescape(raw: str) -> str:
    try:
        value = json.loads(f'"{raw}"')
    except ValueError:
        return raw
    return value if isinstance(value, str) else raw


def match_checkpoint(text: str) -> str | None:
    for pattern in CHECKPOINT_PATTERNS:
        m = pattern.search(text)
        if m:
            return _unescape(m.group(1))
    return None


def match_loras(text: str) -> list[str]:
    names: list[str] = []
    for pattern in LORA_PATTERNS:
        for m in pattern.finditer(text):
            name = _unescape(m.group(1))
            if name and not _contains_casefold(names, name):
                names.append(name)
    return names


def scan_models(graph: WorkflowGraph) -> ModelScan:
    return ModelScan().update(graph)
