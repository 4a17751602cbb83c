"""polycut command-line interface."""

from __future__ import annotations

import argparse
import logging
import random

from .io import load_json, save_json
from .models import CanvasSize


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="polycut CLI")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate and cut a puzzle shape")
    generate.add_argument("--shape", choices=["polygon", "cloud", "jagged"], default="polygon")
    generate.add_argument("--cut-type", choices=["straight", "diagonal", "curve"], default="straight")
    generate.add_argument("--cuts", type=int, default=3)
    generate.add_argument("--width", type=float, default=800.0)
    generate.add_argument("--height", type=float, default=600.0)
    generate.add_argument("--seed", type=int)
    generate.add_argument("--scatter", action="store_true")
    generate.add_argument("--out", dest="output_path", required=True)
    generate.add_argument("--render-out", dest="render_path")

    check = sub.add_parser("check", help="Check that a puzzle's pieces tile its shape")
    check.add_argument("--in", dest="input_path", required=True)
    check.add_argument("--tolerance", type=float, default=1.0)

    render = sub.add_parser("render", help="Render a puzzle to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--no-shape", action="store_true")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "generate":
        _cmd_generate(args)

    elif args.command == "check":
        _cmd_check(args)

    elif args.command == "render":
        from .render import render_png
        doc = load_json(args.input_path)
        render_png(doc.shape, doc.pieces, doc.canvas, args.output_path,
                   show_shape=not args.no_shape)
        print(f"Saved {args.output_path}")


def _cmd_generate(args) -> None:
    from .adaptation import CanvasSizeError
    from .session import PuzzleSession

    if args.cuts < 0:
        print(f"--cuts must be non-negative, got {args.cuts}")
        raise SystemExit(1)
    try:
        session = PuzzleSession(
            CanvasSize(args.width, args.height),
            rng=random.Random(args.seed),
        )
    except CanvasSizeError as exc:
        print(exc)
        raise SystemExit(1)

    session.new_puzzle(args.shape, args.cut_type, args.cuts)
    if args.scatter:
        session.scatter()

    shape = session.shape()
    save_json(shape, session.pieces, session.canvas_size, args.output_path)
    if args.render_path:
        from .render import render_png
        render_png(shape, session.pieces, session.canvas_size, args.render_path)
    print(f"{len(session.pieces)} pieces")
    print(f"Saved {args.output_path}")


def _cmd_check(args) -> None:
    from .integrity import check_coverage

    doc = load_json(args.input_path)
    report = check_coverage(doc.shape, doc.pieces, tolerance=args.tolerance)
    print(f"pieces: {len(doc.pieces)}")
    print(f"area_ratio: {report.area_ratio:.6f}")
    print(f"overlap_area: {report.overlap_area:.4f}")
    print(f"midpoints_checked: {report.midpoints_checked}")
    if not report.ok:
        for index in report.outside_midpoints:
            print(f"piece {index} extends outside the shape")
        raise SystemExit(1)
    print("OK")


if __name__ == "__main__":
    main()
