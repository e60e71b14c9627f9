"""Print the generation metadata of one or more PNG images as JSON lines.

Usage:
    python scripts/extract_png_meta.py image.png https://host/other.png
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from genmeta_backend.adapters.byte_source import FetchError  # noqa: E402
from genmeta_backend.features.pngmeta import enrich_png_meta  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract prompt, negative prompt, checkpoint and LoRA names from AI-generated PNGs."
    )
    parser.add_argument("sources", nargs="+", help="Local paths or http(s) URLs.")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print with this indent.")
    return parser.parse_args()


async def _run(sources: list[str], indent: int | None) -> int:
    failures = 0
    for src in sources:
        try:
            record = await enrich_png_meta(src)
        except FetchError as exc:
            print(f"{src}: {exc}", file=sys.stderr)
            failures += 1
            continue
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=indent))
    return 1 if failures else 0


def main() -> int:
    args = _parse_args()
    return asyncio.run(_run(args.sources, args.indent))


if __name__ == "__main__":
    raise SystemExit(main())
