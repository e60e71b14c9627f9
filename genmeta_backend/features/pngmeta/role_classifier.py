"""Positive/negative polarity heuristics for prompt text nodes."""

from __future__ import annotations

import re
from typing import Any

# Words that typically open a negative prompt, matched at the start of the text
# or right after a `,` `;` or newline separator.
NEGATIVE_FINGERPRINTS: tuple[str, ...] = (
    "lowres",
    "worst quality",
    "low quality",
    "bad anatomy",
    "bad proportions",
    "signature",
    "watermark",
    "jpeg artifacts",
    "text",
    "logo",
    "simple background",
    "borders",
)

NEGATIVE_TITLE_TOKEN = "negative"


def _compile_fingerprint_re(fingerprints: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(f) for f in fingerprints)
    return re.compile(rf"(?:^|[,;\n])\s*(?:{alternatives})\b", re.IGNORECASE)


_NEGATIVE_FINGERPRINT_RE = _compile_fingerprint_re(NEGATIVE_FINGERPRINTS)


def title_marks_negative(title: Any) -> bool:
    return NEGATIVE_TITLE_TOKEN in str(title or "").lower()


def text_looks_negative(text: Any) -> bool:
    if not isinstance(text, str) or not text:
        return False
    return _NEGATIVE_FINGERPRINT_RE.search(text) is not None


def looks_negative(text: Any, title: Any = "") -> bool:
    """
    Classify prompt text as negative when its node title says so, or when the
    text carries a typical negative-prompt keyword fingerprint.
    """
    return title_marks_negative(title) or text_looks_negative(text)
