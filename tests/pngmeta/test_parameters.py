from __future__ import annotations

import pytest

from genmeta_backend.features.pngmeta import parameters as p


def test_split_a1111_block():
    text = "A, B\nNegative prompt: C, D\nSteps: 20, Sampler: Euler a, CFG scale: 7, Seed: 1"
    assert p.split_combined_prompts(text) == ("A, B", "C, D")


def test_split_without_marker_strips_prompt_label():
    assert p.split_combined_prompts("Prompt: a lighthouse at dusk") == ("a lighthouse at dusk", None)


def test_split_without_marker_keeps_inline_text():
    assert p.split_combined_prompts("no labels here") == ("no labels here", None)


def test_split_marker_case_and_spacing():
    assert p.split_combined_prompts("sky\nNEGATIVE   PROMPT: ground") == ("sky", "ground")


def test_split_strips_leading_separators_after_marker():
    assert p.split_combined_prompts("Negative prompt: :- lowres") == ("", "lowres")


@pytest.mark.parametrize(
    "settings",
    [
        "Steps: 30",
        "Sampler: DPM++ 2M",
        "CFG scale: 5",
        "cfgscale: 5",
        "Seed: 42",
        "Size: 512x768",
        "Model: sdxl",
        "VAE: auto",
        "Clip skip: 2",
        "Denoising strength: 0.4",
    ],
)
def test_settings_line_ends_negative(settings):
    _, negative = p.split_combined_prompts(f"x\nNegative prompt: ugly, blurry\n{settings}")
    assert negative == "ugly, blurry"


def test_settings_keyword_inside_a_line_is_kept():
    _, negative = p.split_combined_prompts("x\nNegative prompt: ugly, Model: toy car")
    assert negative == "ugly, Model: toy car"


def test_multiline_negative_is_kept_until_settings():
    _, negative = p.split_combined_prompts("x\nNegative prompt: ugly\nextra limbs\nSteps: 20")
    assert negative == "ugly\nextra limbs"


def test_has_negative_marker():
    assert p.has_negative_marker("a\nnegative prompt: b")
    assert not p.has_negative_marker("a negative space study")
    assert not p.has_negative_marker(None)
    assert not p.has_negative_marker("")


def test_strip_prompt_label_only_once():
    assert p.strip_prompt_label("prompt: prompt: x") == "prompt: x"
