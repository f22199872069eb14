"""Sub-command launcher for brickwork."""

from __future__ import annotations

import argparse
from typing import Sequence

from .pipelines import apply_seams, generate_pattern

__all__ = ["build_cli"]


def build_cli(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Brick-pattern quilt tessellation tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate",
        help="Generate a new pattern and save it as a bundle",
    )
    generate_pattern.add_arguments(generate)

    seams = subparsers.add_parser(
        "seams",
        help="Apply seam allowance to a saved pattern bundle",
    )
    apply_seams.add_arguments(seams)

    args = parser.parse_args(argv)

    if args.command == "generate":
        return generate_pattern.run(args, generate)
    if args.command == "seams":
        return apply_seams.run(args, seams)

    parser.error(f"Unknown command {args.command!r}")  # pragma: no cover - argparse guards this
    return 2
