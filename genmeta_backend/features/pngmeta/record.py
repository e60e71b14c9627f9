"""Output record of one PNG metadata extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExtractedMetadata:
    src: str
    prompt: str | None = None
    parameters: str | None = None
    checkpoint: str | None = None
    loras: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize with empty fields omitted; `src` is always present."""
        out: dict[str, Any] = {"src": self.src}
        if self.prompt:
            out["prompt"] = self.prompt
        if self.parameters:
            out["parameters"] = self.parameters
        if self.checkpoint:
            out["checkpoint"] = self.checkpoint
        if self.loras:
            out["loras"] = list(self.loras)
        return out
