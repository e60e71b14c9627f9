"""
Flat-text ("A1111-style") parameter block normalization.

    masterpiece, 1girl
    Negative prompt: lowres, bad anatomy
    Steps: 20, Sampler: Euler a, CFG scale: 7, Seed: 1234
"""
from __future__ import annotations

import re

NEGATIVE_MARKER_RE = re.compile(r"negative\s*prompt:", re.IGNORECASE)
_PROMPT_LABEL_RE = re.compile(r"^\s*prompt:\s*", re.IGNORECASE)
_LEADING_SEPARATORS_RE = re.compile(r"^[\s:\-]+")

# Keys that open the trailing generation-settings line
SETTINGS_KEYWORDS: tuple[str, ...] = (
    "steps",
    "sampler",
    r"cfg\s*scale",
    "seed",
    "size",
    "model",
    "vae",
    r"clip\s*skip",
    r"denoising\s*strength",
)
_SETTINGS_LINE_RE = re.compile(
    r"(?:^|\n)\s*(?:" + "|".join(SETTINGS_KEYWORDS) + r")\s*:",
    re.IGNORECASE,
)


def has_negative_marker(text: str | None) -> bool:
    return bool(text) and NEGATIVE_MARKER_RE.search(text) is not None


def strip_prompt_label(text: str) -> str:
    return _PROMPT_LABEL_RE.sub("", text or "", count=1).strip()


def _cut_settings(text: str) -> str:
    m = _SETTINGS_LINE_RE.search(text)
    return text[: m.start()] if m else text


def split_combined_prompts(text: str) -> tuple[str, str | None]:
    """
    Split a combined parameter block into (positive, negative).

    Without a `Negative prompt:` marker, negative is None and the positive
    text is returned with only a leading `Prompt:` label removed.
    """
    text = text or ""
    m = NEGATIVE_MARKER_RE.search(text)
    if m is None:
        return strip_prompt_label(text), None

    positive = strip_prompt_label(text[: m.start()])
    rest = _LEADING_SEPARATORS_RE.sub("", text[m.end() :], count=1)
    negative = _cut_settings(rest).strip()
    return positive, negative
