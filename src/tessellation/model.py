"""Pieces, configuration and results produced by a tessellation run."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Sequence

import numpy as np

from .geometry import BoundingBox, Polygon

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_PALETTE",
    "Piece",
    "PiecePosition",
    "TessellationConfig",
    "TessellationResult",
    "equal_color_weights",
    "initial_palette",
    "normalize_color_weights",
    "random_palette_color",
    "reconcile_color_weights",
    "reconcile_palette",
]


class PiecePosition(str, Enum):
    """Where a piece sits inside its grid cell."""

    TOP = "top"
    BOTTOM = "bottom"
    FULL = "full"


@dataclass(slots=True)
class Piece:
    """A single cut piece; ``color_index`` is ``None`` until colours are assigned."""

    id: str
    polygon: Polygon
    row: int
    col: int
    grid_col: int
    position: PiecePosition
    is_triangle: bool = False
    color_index: int | None = None

    def with_polygon(self, polygon: Polygon) -> "Piece":
        """Return a copy carrying ``polygon`` and the same identity/metadata."""

        return replace(self, polygon=list(polygon))

    def to_mapping(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "polygon": [[x, y] for x, y in self.polygon],
            "color_index": self.color_index,
            "is_triangle": self.is_triangle,
            "row": self.row,
            "col": self.col,
            "grid_col": self.grid_col,
            "position": self.position.value,
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Piece":
        polygon = [(float(point[0]), float(point[1])) for point in payload["polygon"]]
        color = payload.get("color_index")
        return cls(
            id=str(payload["id"]),
            polygon=polygon,
            row=int(payload["row"]),
            col=int(payload["col"]),
            grid_col=int(payload.get("grid_col", payload["col"])),
            position=PiecePosition(payload.get("position", PiecePosition.FULL.value)),
            is_triangle=bool(payload.get("is_triangle", False)),
            color_index=int(color) if color is not None else None,
        )


def equal_color_weights(count: int) -> tuple[float, ...]:
    """Equal percentage shares that sum to exactly 100."""

    if count <= 0:
        raise ValueError("Colour count must be positive.")
    base = math.floor(10000 / count) / 100
    weights = [base] * count
    weights[-1] = 100 - base * (count - 1)
    return tuple(weights)


def normalize_color_weights(weights: Sequence[float]) -> tuple[float, ...]:
    """Rescale relative weights to sum to 100; all-zero weights are returned as is."""

    values = [float(weight) for weight in weights]
    total = sum(values)
    if total <= 0:
        return tuple(values)
    return tuple(value / total * 100 for value in values)


def reconcile_color_weights(weights: Sequence[float], count: int) -> tuple[float, ...]:
    """Resize a weight vector to ``count`` colours and renormalise it.

    New colours enter with an equal share of ``100 / count`` before the
    renormalisation; removed colours are truncated from the end.
    """

    if count <= 0:
        raise ValueError("Colour count must be positive.")
    values = [float(weight) for weight in weights[:count]]
    while len(values) < count:
        values.append(100.0 / count)
    return normalize_color_weights(values)


@dataclass(frozen=True, slots=True)
class TessellationConfig:
    """Immutable parameters for one generation run.

    Fractions are on the unit interval. ``color_probabilities`` are relative
    weights (normally summing to 100). ``seed`` makes the run reproducible.
    """

    rows: int = 8
    cols: int = 10
    square_size: float = 50.0
    colors: int = 3
    split_probability: float = 0.4
    seam_allowance: float = 6.35
    offset_amount: float = 0.5
    width_variation: float = 0.3
    height_variation: float = 0.2
    split_angle_variation: float = 0.5
    same_color_probability: float = 0.1
    color_probabilities: tuple[float, ...] = field(default_factory=lambda: equal_color_weights(3))
    seed: int | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TessellationConfig":
        defaults = cls()
        colors = int(payload.get("colors", defaults.colors))
        weights = payload.get("color_probabilities")
        if weights is None:
            probabilities = equal_color_weights(colors)
        else:
            probabilities = tuple(float(weight) for weight in weights)
        seed = payload.get("seed")
        return cls(
            rows=int(payload.get("rows", defaults.rows)),
            cols=int(payload.get("cols", defaults.cols)),
            square_size=float(payload.get("square_size", defaults.square_size)),
            colors=colors,
            split_probability=float(payload.get("split_probability", defaults.split_probability)),
            seam_allowance=float(payload.get("seam_allowance", defaults.seam_allowance)),
            offset_amount=float(payload.get("offset_amount", defaults.offset_amount)),
            width_variation=float(payload.get("width_variation", defaults.width_variation)),
            height_variation=float(payload.get("height_variation", defaults.height_variation)),
            split_angle_variation=float(
                payload.get("split_angle_variation", defaults.split_angle_variation)
            ),
            same_color_probability=float(
                payload.get("same_color_probability", defaults.same_color_probability)
            ),
            color_probabilities=probabilities,
            seed=int(seed) if seed is not None else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "square_size": self.square_size,
            "colors": self.colors,
            "split_probability": self.split_probability,
            "seam_allowance": self.seam_allowance,
            "offset_amount": self.offset_amount,
            "width_variation": self.width_variation,
            "height_variation": self.height_variation,
            "split_angle_variation": self.split_angle_variation,
            "same_color_probability": self.same_color_probability,
            "color_probabilities": list(self.color_probabilities),
            "seed": self.seed,
        }

    def with_colors(self, count: int) -> "TessellationConfig":
        """Return a copy for ``count`` colours with reconciled weights."""

        return replace(
            self,
            colors=count,
            color_probabilities=reconcile_color_weights(self.color_probabilities, count),
        )


DEFAULT_CONFIG = TessellationConfig()


@dataclass(frozen=True, slots=True)
class TessellationResult:
    """Ordered pieces of one run, the configuration used and their bounds."""

    pieces: list[Piece]
    config: TessellationConfig
    bounds: BoundingBox

    @property
    def width(self) -> float:
        return self.bounds.width

    @property
    def height(self) -> float:
        return self.bounds.height

    def to_mapping(self) -> dict[str, Any]:
        return {
            "pieces": [piece.to_mapping() for piece in self.pieces],
            "config": self.config.to_mapping(),
            "bounds": self.bounds.to_mapping(),
        }


DEFAULT_PALETTE: tuple[str, ...] = ("#4A90E2", "#2C3E50", "#1A1F3A")


def random_palette_color(rng: np.random.Generator) -> str:
    """Draw a mid-saturation, mid-lightness HSL colour string."""

    hue = int(rng.integers(0, 360))
    saturation = 40 + int(rng.integers(0, 40))
    lightness = 40 + int(rng.integers(0, 20))
    return f"hsl({hue}, {saturation}%, {lightness}%)"


def initial_palette(count: int, rng: np.random.Generator) -> list[str]:
    palette = list(DEFAULT_PALETTE[: min(count, len(DEFAULT_PALETTE))])
    while len(palette) < count:
        palette.append(random_palette_color(rng))
    return palette


def reconcile_palette(
    palette: Sequence[str], count: int, rng: np.random.Generator
) -> list[str]:
    """Truncate or extend ``palette`` so it holds ``count`` entries."""

    resized = list(palette[:count])
    while len(resized) < count:
        resized.append(random_palette_color(rng))
    return resized
