"""Versioned JSON bundles for saving and reloading generated patterns."""

from __future__ import annotations

import json
import math
import warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Sequence

from schemas.validators import SchemaValidationError, validate_pattern_bundle
from tessellation.geometry import BoundingBox, calculate_bounds
from tessellation.model import Piece, TessellationConfig, TessellationResult

__all__ = [
    "PATTERN_FORMAT_VERSION",
    "PatternBundle",
    "PatternBundleError",
    "build_pattern_bundle",
    "load_pattern_bundle",
    "parse_pattern_bundle",
    "save_pattern_bundle",
]


PATTERN_FORMAT_VERSION = "1.0.0"
_REQUIRED_SECTIONS = ("config", "palette", "pieces", "bounds")
_BOUNDS_TOLERANCE = 1e-6


class PatternBundleError(RuntimeError):
    """Raised when a saved pattern cannot be read."""


@dataclass(slots=True)
class PatternBundle:
    """Everything needed to restore a pattern without regenerating it."""

    version: str
    config: TessellationConfig
    palette: list[str]
    pieces: list[Piece]
    width: float
    height: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "config": self.config.to_mapping(),
            "palette": list(self.palette),
            "pieces": [piece.to_mapping() for piece in self.pieces],
            "bounds": {"width": self.width, "height": self.height},
            "metadata": dict(self.metadata),
        }

    def to_result(self) -> TessellationResult:
        """Rebuild a result from the stored piece list, bounds recomputed."""

        bounds = calculate_bounds(piece.polygon for piece in self.pieces)
        return TessellationResult(pieces=list(self.pieces), config=self.config, bounds=bounds)


def build_pattern_bundle(
    result: TessellationResult,
    palette: Sequence[str],
    name: str | None = None,
) -> PatternBundle:
    metadata: dict[str, Any] = {"saved": datetime.now(timezone.utc).isoformat()}
    if name is not None:
        metadata["name"] = name
    return PatternBundle(
        version=PATTERN_FORMAT_VERSION,
        config=result.config,
        palette=list(palette),
        pieces=list(result.pieces),
        width=result.width,
        height=result.height,
        metadata=metadata,
    )


def parse_pattern_bundle(payload: Any) -> PatternBundle:
    """Check and decode a bundle payload.

    Only ``1.x`` bundles are accepted. Bounds that disagree with the stored
    pieces are kept as stored but reported with a warning.
    """

    if not isinstance(payload, Mapping):
        raise PatternBundleError("Invalid pattern file: not a JSON object.")

    version = payload.get("version")
    if not version:
        raise PatternBundleError("Invalid pattern file: missing version information.")
    if not str(version).startswith("1."):
        raise PatternBundleError(
            f"Incompatible pattern version: {version}. Supported versions are 1.x.x."
        )

    missing = [section for section in _REQUIRED_SECTIONS if payload.get(section) is None]
    if missing:
        raise PatternBundleError(f"Invalid pattern file: missing {', '.join(missing)}.")
    if not payload["pieces"]:
        raise PatternBundleError("Invalid pattern file: the piece list is empty.")

    try:
        validate_pattern_bundle(payload)
    except SchemaValidationError as exc:
        raise PatternBundleError(str(exc)) from exc

    pieces = [Piece.from_mapping(entry) for entry in payload["pieces"]]
    width = float(payload["bounds"]["width"])
    height = float(payload["bounds"]["height"])

    actual = calculate_bounds(piece.polygon for piece in pieces)
    _warn_on_bounds_mismatch(actual, width, height)

    return PatternBundle(
        version=str(version),
        config=TessellationConfig.from_mapping(payload["config"]),
        palette=[str(color) for color in payload["palette"]],
        pieces=pieces,
        width=width,
        height=height,
        metadata=dict(payload.get("metadata") or {}),
    )


def _warn_on_bounds_mismatch(actual: BoundingBox, width: float, height: float) -> None:
    if math.isclose(actual.width, width, abs_tol=_BOUNDS_TOLERANCE) and math.isclose(
        actual.height, height, abs_tol=_BOUNDS_TOLERANCE
    ):
        return
    warnings.warn(
        "Stored pattern bounds "
        f"({width:.3f} x {height:.3f}) differ from the piece extent "
        f"({actual.width:.3f} x {actual.height:.3f}).",
        RuntimeWarning,
        stacklevel=3,
    )


def save_pattern_bundle(bundle: PatternBundle, path: Path | str) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(bundle.to_mapping(), indent=2), encoding="utf-8")
    return destination


def load_pattern_bundle(path: Path | str) -> PatternBundle:
    source = Path(path)
    with source.open("r", encoding="utf-8") as stream:
        try:
            payload = json.load(stream)
        except json.JSONDecodeError as exc:
            raise PatternBundleError(f"Invalid pattern file {source}: {exc}") from exc
    return parse_pattern_bundle(payload)
