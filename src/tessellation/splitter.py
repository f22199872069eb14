"""Split one rectangular cell into two pieces."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

from .geometry import Point, Polygon

__all__ = [
    "CUT_MAX_FRACTION",
    "CUT_MIN_FRACTION",
    "MAX_DEVIATION_SCALE",
    "SplitKind",
    "split_kind",
    "split_rectangle",
]


#: Fraction of ``angle_variation`` used as the maximum cut deviation.
MAX_DEVIATION_SCALE = 0.8
CUT_MIN_FRACTION = 0.1
CUT_MAX_FRACTION = 0.9


class SplitKind(str, Enum):
    DIAGONAL = "diagonal"
    ANGLED = "angled"


def split_kind(angle_variation: float) -> SplitKind:
    return SplitKind.DIAGONAL if angle_variation == 0 else SplitKind.ANGLED


def _cut_fraction(max_deviation: float, rng: np.random.Generator) -> float:
    fraction = 0.5 + (rng.random() - 0.5) * max_deviation
    return max(CUT_MIN_FRACTION, min(CUT_MAX_FRACTION, fraction))


def split_rectangle(
    rect: Sequence[Point],
    angle_variation: float,
    rng: np.random.Generator,
) -> tuple[Polygon, Polygon]:
    """Split ``[tl, tr, br, bl]`` into two triangles or two quadrilaterals.

    With no angle variation one of the two diagonals is picked at random and
    two triangles sharing it are returned. Otherwise the cut runs from a point
    on the top edge to a point on the bottom edge; both points are drawn
    independently and kept within 10%-90% of the width so no sliver appears.
    The input winding is preserved in both outputs.
    """

    tl, tr, br, bl = rect

    if split_kind(angle_variation) is SplitKind.DIAGONAL:
        if rng.random() < 0.5:
            return [tl, tr, br], [tl, br, bl]
        return [tl, tr, bl], [tr, br, bl]

    width = tr[0] - tl[0]
    max_deviation = angle_variation * MAX_DEVIATION_SCALE
    # TODO: evaluate a correlated cut (one random angle plus bounded wobble)
    # against these independent top/bottom draws.
    top_fraction = _cut_fraction(max_deviation, rng)
    bottom_fraction = _cut_fraction(max_deviation, rng)
    top_point = (tl[0] + width * top_fraction, tl[1])
    bottom_point = (bl[0] + width * bottom_fraction, bl[1])

    left = [tl, top_point, bottom_point, bl]
    right = [top_point, tr, br, bottom_point]
    return left, right
