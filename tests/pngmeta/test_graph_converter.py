from __future__ import annotations

from genmeta_backend.features.pngmeta import graph_converter as gc
from genmeta_backend.features.pngmeta.graph_converter import GraphEncoding, NodeRef, WorkflowGraph


# ─── NodeRef ────────────────────────────────────────────────────────────────

def test_node_ref_parse_link_pair():
    assert NodeRef.parse(["5", 0]) == NodeRef("5", 0)


def test_node_ref_parse_bare_id():
    assert NodeRef.parse(7) == NodeRef("7", None)
    assert NodeRef.parse("12") == NodeRef("12", None)


def test_node_ref_parse_rejects_empty_and_structured_values():
    assert NodeRef.parse([]) is None
    assert NodeRef.parse(None) is None
    assert NodeRef.parse({"id": 1}) is None
    assert NodeRef.parse([None, 0]) is None


def test_node_ref_integral_float_id():
    assert NodeRef.parse([5.0, 0]).node_id == "5"


def test_node_ref_resolve_dangling_is_none():
    graph = WorkflowGraph.from_json({"1": {"class_type": "CLIPTextEncode", "inputs": {"text": "cat"}}})
    assert NodeRef("99").resolve(graph) is None
    assert graph.resolve(["99", 0]) is None


def test_node_ref_resolve_text_variants():
    graph = WorkflowGraph.from_json(
        {
            "1": {"class_type": "CLIPTextEncode", "inputs": {"text": "cat"}},
            "2": {"class_type": "CLIPTextEncode", "inputs": {"text": ["20", 0]}},
            "3": {"class_type": "CLIPTextEncode", "inputs": {"text": []}},
            "4": {"class_type": "CLIPTextEncode", "inputs": {"text": 42}},
        }
    )
    assert graph.resolve(["1", 0]) == "cat"
    assert graph.resolve(["2", 0]) == "20"
    assert graph.resolve(["3", 0]) is None
    assert graph.resolve(["4", 0]) is None


# ─── WorkflowGraph.from_json ────────────────────────────────────────────────

def test_from_json_node_map_uses_keys_as_ids():
    graph = WorkflowGraph.from_json(
        {
            "3": {"class_type": "KSampler", "inputs": {}},
            "4": {"inputs": {"ckpt_name": "a.safetensors"}},
            "extra": {"unrelated": True},
            "version": 1,
        }
    )
    assert graph.encoding == GraphEncoding.NODE_MAP
    assert [n.id for n in graph] == ["3", "4"]
    assert graph.get(3).class_type == "KSampler"


def test_from_json_node_map_prefers_explicit_id():
    graph = WorkflowGraph.from_json({"a": {"id": 9, "class_type": "X", "inputs": {}}})
    assert graph.get("9") is not None
    assert graph.get("a") is None


def test_from_json_node_list():
    graph = WorkflowGraph.from_json(
        {"nodes": [{"id": 5, "class_type": "CLIPTextEncode", "inputs": {"text": "cat"}}, "junk"]}
    )
    assert graph.encoding == GraphEncoding.NODE_LIST
    assert len(graph) == 1
    assert graph.get("5").text == "cat"


def test_from_json_bare_list_keeps_node_shaped_members():
    graph = WorkflowGraph.from_json([{"class_type": "X", "inputs": {}}, {"foo": 1}, 3])
    assert len(graph) == 1


def test_from_json_unsupported_shapes_are_empty():
    for value in (None, 3, "x", {}, {"a": 1}, [], {"nodes": []}):
        graph = WorkflowGraph.from_json(value)
        assert graph.encoding == GraphEncoding.EMPTY
        assert len(graph) == 0


# ─── LiteGraph conversion ───────────────────────────────────────────────────

def _litegraph_workflow():
    return {
        "last_node_id": 9,
        "nodes": [
            {"id": 4, "type": "CheckpointLoaderSimple", "inputs": [], "widgets_values": ["dream.safetensors"]},
            {"id": 10, "type": "LoraLoader", "inputs": [], "widgets_values": ["style.safetensors", 0.8, 1.0]},
            {"id": 6, "type": "CLIPTextEncode", "title": "Positive", "inputs": [{"name": "clip", "link": 3}], "widgets_values": ["a cat"]},
            {"id": 7, "type": "CLIPTextEncode", "title": "Negative", "inputs": [{"name": "clip", "link": 5}], "widgets_values": ["blurry"]},
            {
                "id": 3,
                "type": "KSampler",
                "inputs": [
                    {"name": "model", "link": 1},
                    {"name": "positive", "link": 4},
                    {"name": "negative", "link": 6},
                    {"name": "seed", "link": None, "widget": {"name": "seed"}},
                ],
                "widgets_values": [1234, "randomize", 20, 7, "euler", "normal", 1],
            },
        ],
        "links": [
            [1, 4, 0, 3, 0, "MODEL"],
            [3, 4, 1, 6, 0, "CLIP"],
            [4, 6, 0, 3, 1, "CONDITIONING"],
            [5, 4, 1, 7, 0, "CLIP"],
            [6, 7, 0, 3, 2, "CONDITIONING"],
        ],
    }


def test_from_json_litegraph_converts_links_and_widgets():
    graph = WorkflowGraph.from_json(_litegraph_workflow())
    assert graph.encoding == GraphEncoding.LITEGRAPH

    sampler = graph.get("3")
    assert sampler.class_type == "KSampler"
    assert sampler.inputs["positive"] == ["6", 0]
    assert sampler.inputs["negative"] == ["7", 0]
    assert sampler.inputs["model"] == ["4", 0]
    assert "seed" not in sampler.inputs

    assert graph.get("6").text == "a cat"
    assert graph.get("7").title == "Negative"
    assert graph.get("4").inputs["ckpt_name"] == "dream.safetensors"
    assert graph.get("10").inputs["lora_name"] == "style.safetensors"


def test_litegraph_object_links():
    wf = {
        "nodes": [
            {"id": 1, "type": "CLIPTextEncode", "inputs": [], "widgets_values": ["dog"]},
            {"id": 2, "type": "KSampler", "inputs": [{"name": "positive", "link": 11}]},
        ],
        "links": [{"id": 11, "origin_id": 1, "origin_slot": 0, "target_id": 2, "target_slot": 1}],
    }
    graph = WorkflowGraph.from_json(wf)
    assert graph.resolve(graph.get(2).inputs["positive"]) == "dog"


def test_litegraph_widget_dict_values_are_merged():
    wf = {"nodes": [{"id": 1, "type": "Power Lora Loader", "inputs": [], "widgets_values": {"lora": "x.safetensors"}}]}
    graph = WorkflowGraph.from_json(wf)
    assert graph.get(1).inputs["lora"] == "x.safetensors"


def test_text_fallback_from_widgets_only_for_text_like_nodes():
    converted = gc._convert_litegraph_node(
        {"id": 1, "type": "PrimitiveString", "inputs": [], "widgets_values": ["", "hello"]}, {}
    )
    assert converted["inputs"]["text"] == "hello"
    converted = gc._convert_litegraph_node({"id": 2, "type": "VAEDecode", "inputs": [], "widgets_values": ["x"]}, {})
    assert "text" not in converted["inputs"]


# ─── helpers ────────────────────────────────────────────────────────────────

def test_node_title_prefers_meta_title():
    assert gc._node_title({"_meta": {"title": "Neg"}, "title": "Other"}) == "Neg"
    assert gc._node_title({"title": "Only"}) == "Only"
    assert gc._node_title(None) == ""


def test_inputs_non_dict():
    assert gc._inputs({"inputs": [1, 2]}) == {}
    assert gc._inputs("x") == {}


# ─── non-finite numbers ─────────────────────────────────────────────────────

def test_node_ref_non_finite_slot_is_dropped():
    assert NodeRef.parse(["5", float("inf")]) == NodeRef("5", None)
    assert NodeRef.parse(["5", float("nan")]) == NodeRef("5", None)


def test_to_int_non_finite():
    assert gc._to_int(float("inf")) is None
    assert gc._to_int(float("-inf")) is None


def test_litegraph_non_finite_link_fields():
    wf = {
        "nodes": [
            {"id": 5, "type": "CLIPTextEncode", "inputs": [], "widgets_values": ["cat"]},
            {
                "id": 3,
                "type": "KSampler",
                "inputs": [{"name": "positive", "link": 1}, {"name": "negative", "link": float("inf")}],
                "widgets_values": [],
            },
        ],
        "links": [[1, 5, float("inf"), 3, 1, "CONDITIONING"], [float("inf"), 5, 0, 3, 2, "CONDITIONING"]],
    }
    graph = WorkflowGraph.from_json(wf)
    assert graph.encoding is GraphEncoding.LITEGRAPH
    assert graph.get("3").inputs == {"positive": ["5", 0]}
