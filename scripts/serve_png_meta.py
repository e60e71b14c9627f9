"""Serve the PNG metadata endpoint on its own aiohttp application.

Usage:
    python scripts/serve_png_meta.py --host 127.0.0.1 --port 8188
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from aiohttp import web  # noqa: E402

from genmeta_backend.routes import build_app  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve GET /genmeta/png-meta?src=<url>.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8188)
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    web.run_app(build_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
