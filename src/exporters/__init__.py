"""Persistence, nesting hand-off and preview helpers for generated patterns."""

from .nesting import (
    NestingBackend,
    NestingError,
    NestingJob,
    PackedPiece,
    PackedResult,
    PackingProgress,
    Placement,
    build_nesting_jobs,
    run_nesting,
)
from .pattern_bundle import (
    PATTERN_FORMAT_VERSION,
    PatternBundle,
    PatternBundleError,
    build_pattern_bundle,
    load_pattern_bundle,
    parse_pattern_bundle,
    save_pattern_bundle,
)
from .preview import render_preview

__all__ = [
    "NestingBackend",
    "NestingError",
    "NestingJob",
    "PackedPiece",
    "PackedResult",
    "PackingProgress",
    "Placement",
    "build_nesting_jobs",
    "run_nesting",
    "PATTERN_FORMAT_VERSION",
    "PatternBundle",
    "PatternBundleError",
    "build_pattern_bundle",
    "load_pattern_bundle",
    "parse_pattern_bundle",
    "save_pattern_bundle",
    "render_preview",
]
