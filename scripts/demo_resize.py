#!/usr/bin/env python3
"""Demo: cut a shape, scatter it and replay a chain of canvas resizes.

Usage
-----
    python scripts/demo_resize.py --shape cloud --cuts 6 --out exports/resize
    python scripts/demo_resize.py --shape jagged --cut-type diagonal --seed 3

One PNG is written per canvas size, plus a summary of how far each
piece drifted from its scatter position after the round trip.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

# Ensure src/ is on the path when run as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from polycut import CanvasSize, PuzzleSession, SessionConfig

SIZES = [
    CanvasSize(800, 600),
    CanvasSize(1920, 1080),
    CanvasSize(390, 844),
    CanvasSize(1024, 768),
    CanvasSize(800, 600),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Canvas resize demo")
    parser.add_argument("--shape", default="cloud", help="polygon, cloud or jagged")
    parser.add_argument("--cut-type", default="straight", help="straight, diagonal or curve")
    parser.add_argument("--cuts", type=int, default=6, help="Number of cuts")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--out", default="exports/resize", help="Output directory")
    parser.add_argument("--no-render", action="store_true", help="Skip PNG output")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = PuzzleSession(SIZES[0], config=SessionConfig(seed=args.seed))
    session.new_puzzle(args.shape, args.cut_type, args.cuts)
    start = list(session.scatter())
    session.complete_piece(0)
    start[0] = session.pieces[0]

    out_dir = Path(args.out)
    for i, size in enumerate(SIZES):
        pieces = session.resize(size)
        print(f"{size.width:g}x{size.height:g}: {len(pieces)} pieces")
        if not args.no_render:
            from polycut.render import render_png
            path = out_dir / f"step{i}_{int(size.width)}x{int(size.height)}.png"
            render_png(session.shape(), pieces, size, path)
            print(f"  saved {path}")

    drift = max(
        math.hypot(a.x - b.x, a.y - b.y) for a, b in zip(start, session.pieces)
    )
    print(f"max drift after round trip: {drift:.3e}")


if __name__ == "__main__":
    main()
