#!/usr/bin/env python3
"""Dungeon structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 1 292372 730727

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from undercroft.dungeon.checks import analyze, issue_counts  # noqa: E402 import after path fix
from undercroft.dungeon.config import GenerationConfig  # noqa: E402 import after path fix
from undercroft.dungeon.pipeline import Dungeon  # noqa: E402 import after path fix

DEFAULT_SEEDS = [1, 292372, 730727]
MAX_ROOM_ATTEMPTS = 500


def run_for_seed(seed: int) -> dict:
    d = Dungeon(seed=seed, config=GenerationConfig(max_room_attempts=MAX_ROOM_ATTEMPTS))
    res = analyze(d)
    issues = issue_counts(res)
    return {
        "seed": seed,
        "floors": len(d.layout.floors),
        "rooms": len(d.rooms),
        "stairs_omitted": len(res["missing_stairs"]),
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
