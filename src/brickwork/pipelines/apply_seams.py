"""Apply seam allowance to a saved pattern without regenerating it."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from exporters.pattern_bundle import (
    PatternBundleError,
    build_pattern_bundle,
    load_pattern_bundle,
    save_pattern_bundle,
)
from exporters.preview import render_preview
from tessellation.layout import apply_seam_allowance

__all__ = ["apply_seams_to_bundle", "main"]


def _default_output(source: Path) -> Path:
    return source.with_name(f"{source.stem}_seams{source.suffix or '.json'}")


def apply_seams_to_bundle(
    source: Path,
    *,
    seam_allowance: float | None = None,
    output_path: Path | None = None,
    preview_path: Path | None = None,
) -> dict[str, Any]:
    """Offset every stored piece by the seam allowance and save a new bundle.

    The stored piece list is used exactly as saved; only the seam allowance
    (from the bundle configuration unless overridden) is applied. Bundles
    written by this function are refused so the allowance is never added twice.
    """

    bundle = load_pattern_bundle(source)
    applied = bundle.metadata.get("seam_allowance_applied")
    if applied is not None:
        raise PatternBundleError(
            f"{source} already carries a {float(applied):.2f} mm seam allowance; "
            "apply seams to the bundle it was made from instead."
        )
    result = bundle.to_result()
    if seam_allowance is not None:
        result = replace(result, config=replace(result.config, seam_allowance=seam_allowance))
    seamed = apply_seam_allowance(result)

    name = bundle.metadata.get("name")
    seamed_bundle = build_pattern_bundle(seamed, bundle.palette, name=name)
    seamed_bundle.metadata["seam_allowance_applied"] = seamed.config.seam_allowance
    destination = save_pattern_bundle(seamed_bundle, output_path or _default_output(source))

    preview = None
    if preview_path is not None:
        preview = render_preview(seamed, bundle.palette, preview_path, sewing_result=result)

    return {
        "result": seamed,
        "sewing_result": result,
        "bundle_path": destination,
        "preview_path": preview,
    }


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("bundle", type=Path, help="Saved pattern bundle JSON")
    parser.add_argument(
        "--seam-allowance",
        type=float,
        help="Override the seam allowance stored in the bundle (millimetres)",
    )
    parser.add_argument("--output", type=Path, help="Where to write the offset bundle")
    parser.add_argument("--preview", type=Path, help="Optional PNG preview path")


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.seam_allowance is not None and not 0 <= args.seam_allowance <= 15:
        parser.error("--seam-allowance must be between 0 and 15 mm.")
    try:
        outcome = apply_seams_to_bundle(
            args.bundle,
            seam_allowance=args.seam_allowance,
            output_path=args.output,
            preview_path=args.preview,
        )
    except (FileNotFoundError, PatternBundleError) as exc:
        parser.error(str(exc))

    print(
        f"Applied {outcome['result'].config.seam_allowance:.2f} mm seam allowance "
        f"to {len(outcome['result'].pieces)} pieces"
    )
    print(f"Wrote pattern bundle to {outcome['bundle_path']}")
    if outcome["preview_path"] is not None:
        print(f"Wrote preview to {outcome['preview_path']}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply seam allowance to a saved pattern.")
    add_arguments(parser)
    args = parser.parse_args(argv)
    return run(args, parser)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
