"""
Canonical workflow graph built from an embedded JSON value.

Three encodings are recognised and resolved once, here, into a single list of
API-style nodes (`class_type` + dict `inputs`):

- NODE_LIST: a `nodes` array (or a bare top-level array) of API-style nodes.
- LITEGRAPH: a `nodes` array saved by the ComfyUI frontend, where `inputs` is a
  list wired through a top-level `links` array and values live in
  `widgets_values`.
- NODE_MAP: an object keyed by node id whose members expose `class_type` or
  `inputs` (the ComfyUI "prompt" format).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Positional widget names for frontend nodes whose widgets are not listed in `inputs`
_WIDGET_INPUT_NAMES: dict[str, tuple[str, ...]] = {
    "cliptextencode": ("text",),
    "checkpointloadersimple": ("ckpt_name",),
    "checkpointloader": ("config_name", "ckpt_name"),
    "loraloader": ("lora_name", "strength_model", "strength_clip"),
    "loraloadermodelonly": ("lora_name", "strength_model"),
}


class GraphEncoding(str, Enum):
    EMPTY = "empty"
    NODE_LIST = "node_list"
    LITEGRAPH = "litegraph"
    NODE_MAP = "node_map"


def _to_int(value: Any) -> int | None:
    try:
        if value is None or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _node_id_str(value: Any) -> str | None:
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    s = str(value).strip()
    return s or None


def _lower(s: Any) -> str:
    return str(s or "").lower()


def _node_type(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    return str(node.get("class_type") or node.get("type") or "")


def _inputs(node: Any) -> dict[str, Any]:
    if not isinstance(node, dict):
        return {}
    ins = node.get("inputs")
    return ins if isinstance(ins, dict) else {}


def _node_title(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    meta = node.get("_meta")
    if isinstance(meta, dict) and meta.get("title"):
        return str(meta["title"])
    return str(node.get("title") or "")


def _text_value(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value:
        return str(value[0])
    return None


@dataclass(frozen=True)
class GraphNode:
    id: str | None
    data: dict[str, Any]

    @property
    def class_type(self) -> str:
        return _node_type(self.data)

    @property
    def inputs(self) -> dict[str, Any]:
        return _inputs(self.data)

    @property
    def title(self) -> str:
        return _node_title(self.data)

    @property
    def text(self) -> str | None:
        """`inputs.text` as a string, or the first element of a non-empty list."""
        return _text_value(self.inputs.get("text"))


@dataclass(frozen=True)
class NodeRef:
    """A link to another node: `[node_id, output_index]` or a bare node id."""

    node_id: str
    slot: int | None = None

    @classmethod
    def parse(cls, value: Any) -> NodeRef | None:
        if isinstance(value, (list, tuple)):
            if not value:
                return None
            node_id = _node_id_str(value[0])
            slot = _to_int(value[1]) if len(value) > 1 else None
        else:
            node_id = _node_id_str(value)
            slot = None
        if node_id is None:
            return None
        return cls(node_id=node_id, slot=slot)

    def resolve(self, graph: WorkflowGraph) -> str | None:
        """Text of the referenced node, or None when the node is missing or has none."""
        node = graph.get(self.node_id)
        if node is None:
            return None
        return node.text


class WorkflowGraph:
    def __init__(self, nodes: list[GraphNode], encoding: GraphEncoding):
        self.nodes = nodes
        self.encoding = encoding
        self._by_id: dict[str, GraphNode] = {}
        for node in nodes:
            if node.id is not None:
                self._by_id[node.id] = node

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: Any) -> GraphNode | None:
        key = _node_id_str(node_id)
        return self._by_id.get(key) if key is not None else None

    def resolve(self, ref: Any) -> str | None:
        parsed = ref if isinstance(ref, NodeRef) else NodeRef.parse(ref)
        return parsed.resolve(self) if parsed is not None else None

    @classmethod
    def empty(cls) -> WorkflowGraph:
        return cls([], GraphEncoding.EMPTY)

    @classmethod
    def from_json(cls, value: Any) -> WorkflowGraph:
        if isinstance(value, dict) and isinstance(value.get("nodes"), list):
            return _from_node_list(value["nodes"], value.get("links"))
        if isinstance(value, list):
            return _from_node_list([v for v in value if _looks_like_graph_node(v)], None)
        if isinstance(value, dict):
            return _from_node_map(value)
        return cls.empty()


def _looks_like_graph_node(value: Any) -> bool:
    return isinstance(value, dict) and ("class_type" in value or "inputs" in value)


def _is_litegraph_node(node: Any) -> bool:
    if not isinstance(node, dict) or "class_type" in node:
        return False
    return "type" in node and (isinstance(node.get("inputs"), list) or "widgets_values" in node)


def _from_node_list(raw_nodes: list[Any], links: Any) -> WorkflowGraph:
    if not any(isinstance(n, dict) for n in raw_nodes):
        return WorkflowGraph.empty()
    if any(_is_litegraph_node(n) for n in raw_nodes):
        link_to_source = _build_link_source_map(links)
        nodes = [
            GraphNode(_node_id_str(n.get("id")), _convert_litegraph_node(n, link_to_source))
            for n in raw_nodes
            if isinstance(n, dict)
        ]
        return WorkflowGraph(nodes, GraphEncoding.LITEGRAPH)
    nodes = [GraphNode(_node_id_str(n.get("id")), n) for n in raw_nodes if isinstance(n, dict)]
    return WorkflowGraph(nodes, GraphEncoding.NODE_LIST)


def _from_node_map(graph: dict[str, Any]) -> WorkflowGraph:
    nodes: list[GraphNode] = []
    for key, value in graph.items():
        if not _looks_like_graph_node(value):
            continue
        node_id = _node_id_str(value.get("id"))
        nodes.append(GraphNode(node_id if node_id is not None else _node_id_str(key), value))
    if not nodes:
        return WorkflowGraph.empty()
    return WorkflowGraph(nodes, GraphEncoding.NODE_MAP)


def _build_link_source_map(links: Any) -> dict[int, tuple[Any, int]]:
    link_to_source: dict[int, tuple[Any, int]] = {}
    if not isinstance(links, list):
        return link_to_source
    for link in links:
        if isinstance(link, list) and len(link) >= 3:
            link_id = _to_int(link[0])
            if link_id is not None:
                link_to_source[link_id] = (link[1], _to_int(link[2]) or 0)
        elif isinstance(link, dict) and "id" in link:
            # Newer frontends serialize links as objects
            link_id = _to_int(link.get("id"))
            if link_id is not None:
                link_to_source[link_id] = (link.get("origin_id"), _to_int(link.get("origin_slot")) or 0)
    return link_to_source


def _init_litegraph_converted_node(node: dict[str, Any]) -> dict[str, Any]:
    return {
        "class_type": node.get("type"),
        "id": node.get("id"),
        "title": node.get("title"),
        "inputs": {},
        "widgets_values": node.get("widgets_values"),
    }


def _populate_converted_inputs_from_list(
    converted_inputs: dict[str, Any],
    raw_inputs: list[Any],
    link_to_source: dict[int, tuple[Any, int]],
) -> None:
    for inp in raw_inputs:
        if not isinstance(inp, dict):
            continue
        name = inp.get("name")
        if not name:
            continue
        link_id = _to_int(inp.get("link"))
        if link_id is not None and link_id in link_to_source:
            src_node_id, src_slot = link_to_source[link_id]
            converted_inputs[str(name)] = [str(src_node_id), src_slot]


def _merge_widget_dict_inputs(converted_inputs: dict[str, Any], widgets_values: Any) -> None:
    if not isinstance(widgets_values, dict):
        return
    for key, value in widgets_values.items():
        if key not in converted_inputs:
            converted_inputs[key] = value


def _merge_positional_widgets(converted_inputs: dict[str, Any], widgets_list: list[Any], node_type: str) -> None:
    names = _WIDGET_INPUT_NAMES.get(_lower(node_type), ())
    for name, value in zip(names, widgets_list):
        if name not in converted_inputs:
            converted_inputs[name] = value


def _set_text_fallback_from_widgets(converted_inputs: dict[str, Any], widgets_list: list[Any], node_type: str) -> None:
    if not widgets_list or "text" in converted_inputs:
        return
    node_type_lower = _lower(node_type)
    if not any(token in node_type_lower for token in ("primitive", "string", "text", "encode")):
        return
    for widget_value in widgets_list:
        if isinstance(widget_value, str) and widget_value.strip():
            converted_inputs["text"] = widget_value
            return


def _convert_litegraph_node(node: dict[str, Any], link_to_source: dict[int, tuple[Any, int]]) -> dict[str, Any]:
    converted = _init_litegraph_converted_node(node)
    converted_inputs: dict[str, Any] = converted["inputs"]
    raw_inputs = node.get("inputs", [])
    if isinstance(raw_inputs, list):
        _populate_converted_inputs_from_list(converted_inputs, raw_inputs, link_to_source)
    elif isinstance(raw_inputs, dict):
        converted_inputs.update(raw_inputs)

    widgets_values = node.get("widgets_values", [])
    widgets_list = widgets_values if isinstance(widgets_values, list) else []
    node_type = _node_type(node)
    _merge_widget_dict_inputs(converted_inputs, widgets_values)
    _merge_positional_widgets(converted_inputs, widgets_list, node_type)
    _set_text_fallback_from_widgets(converted_inputs, widgets_list, node_type)
    return converted
