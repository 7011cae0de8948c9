"""Cinematic Breakthrough - headless preview of the breakthrough director."""

import argparse
import asyncio
import json
import logging
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(__file__))

from cinematic.breakthrough.types import BREAKTHROUGH_CLASSES, QUALITY_TIERS
from cinematic.device_tier import detect_quality_tier
from cinematic.preview import DEFAULT_FPS, PreviewPresenter


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Preview breakthrough sequences without a renderer")
    parser.add_argument("--tier", choices=QUALITY_TIERS, default=None,
                        help="Quality tier (default: detected from this machine)")
    parser.add_argument("--reduced-motion", action="store_true")
    parser.add_argument("--fps", type=_positive_float, default=DEFAULT_FPS,
                        help="Frame rate the fake renderer reports")
    parser.add_argument("--runs", type=int, default=1)
    parser.add_argument("--lose-context-at", type=int, default=None, metavar="FRAME",
                        help="Simulate a lost rendering context at this frame")
    parser.add_argument("--hint", choices=BREAKTHROUGH_CLASSES, default=None,
                        help="Breakthrough class to favour")
    parser.add_argument("--json", action="store_true", help="Print run reports as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    presenter = PreviewPresenter(
        quality_tier=args.tier or detect_quality_tier(),
        reduced_motion=args.reduced_motion,
        fps=args.fps,
        lose_context_at=args.lose_context_at,
        breakthrough_type=args.hint,
    )
    reports = asyncio.run(presenter.run(max(1, args.runs)))

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for r in reports:
            status = r.outcome if r.abort_reason is None else f"{r.outcome} ({r.abort_reason})"
            safe = " [safe mode]" if r.safe_mode else ""
            print(f"{r.variant_id:<22} {r.intensity:<8} seed={r.seed:<10} "
                  f"{r.final_duration}ms {r.particle_count} particles -> {status}{safe}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
