"""Generate a brick-pattern tessellation and save it as a pattern bundle."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

import numpy as np
import yaml

from exporters.pattern_bundle import build_pattern_bundle, save_pattern_bundle
from exporters.preview import render_preview
from schemas.validators import SchemaValidationError, load_config, validate_config_payload
from tessellation.layout import apply_seam_allowance, generate_tessellation
from tessellation.model import DEFAULT_CONFIG, TessellationConfig, initial_palette

OUTPUT_ROOT = Path("outputs/patterns")

__all__ = ["build_config", "generate_pattern", "main"]


def build_config(
    base: TessellationConfig,
    *,
    rows: int | None = None,
    cols: int | None = None,
    square_size: float | None = None,
    colors: int | None = None,
    seam_allowance: float | None = None,
    seed: int | None = None,
) -> TessellationConfig:
    """Apply command line overrides to ``base`` and validate the outcome."""

    config = base
    if colors is not None and colors != config.colors:
        config = config.with_colors(colors)
    overrides: dict[str, Any] = {
        key: value
        for key, value in {
            "rows": rows,
            "cols": cols,
            "square_size": square_size,
            "seam_allowance": seam_allowance,
            "seed": seed,
        }.items()
        if value is not None
    }
    if overrides:
        config = replace(config, **overrides)
    validate_config_payload(config.to_mapping())
    return config


def generate_pattern(
    config: TessellationConfig,
    *,
    output_path: Path,
    palette: Sequence[str] | None = None,
    name: str | None = None,
    preview_path: Path | None = None,
) -> dict[str, Any]:
    """Generate, persist and optionally preview one pattern."""

    result = generate_tessellation(config)
    if palette is None:
        palette = initial_palette(result.config.colors, np.random.default_rng(result.config.seed))

    bundle = build_pattern_bundle(result, palette, name=name)
    bundle_path = save_pattern_bundle(bundle, output_path)

    preview = None
    if preview_path is not None:
        seamed = apply_seam_allowance(result)
        preview = render_preview(
            seamed,
            palette,
            preview_path,
            sewing_result=result if seamed is not result else None,
        )

    return {
        "result": result,
        "bundle": bundle,
        "bundle_path": bundle_path,
        "preview_path": preview,
    }


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, help="JSON or YAML configuration file")
    parser.add_argument("--rows", type=int, help="Number of grid rows (2-20)")
    parser.add_argument("--cols", type=int, help="Number of grid columns (2-20)")
    parser.add_argument("--square-size", type=float, help="Base cell size in millimetres")
    parser.add_argument("--colors", type=int, help="Number of fabrics (2-5)")
    parser.add_argument("--seam-allowance", type=float, help="Seam allowance in millimetres")
    parser.add_argument("--seed", type=int, help="Seed for a reproducible pattern")
    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_ROOT / "pattern.json",
        help="Where to write the pattern bundle JSON",
    )
    parser.add_argument("--preview", type=Path, help="Optional PNG preview path")
    parser.add_argument("--name", type=str, help="Optional name stored in the bundle")


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        base = load_config(args.config) if args.config is not None else DEFAULT_CONFIG
        config = build_config(
            base,
            rows=args.rows,
            cols=args.cols,
            square_size=args.square_size,
            colors=args.colors,
            seam_allowance=args.seam_allowance,
            seed=args.seed,
        )
    except (OSError, yaml.YAMLError, SchemaValidationError, TypeError, ValueError) as exc:
        parser.error(str(exc))

    outcome = generate_pattern(
        config,
        output_path=args.output,
        name=args.name,
        preview_path=args.preview,
    )
    result = outcome["result"]
    print(
        f"Generated {len(result.pieces)} pieces "
        f"({result.width:.1f} x {result.height:.1f} mm, seed {result.config.seed})"
    )
    print(f"Wrote pattern bundle to {outcome['bundle_path']}")
    if outcome["preview_path"] is not None:
        print(f"Wrote preview to {outcome['preview_path']}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a brick-pattern quilt tessellation.")
    add_arguments(parser)
    args = parser.parse_args(argv)
    return run(args, parser)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
