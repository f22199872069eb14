"""Polygon primitives shared by the tessellation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

__all__ = [
    "BoundingBox",
    "Point",
    "Polygon",
    "POINT_TOLERANCE",
    "calculate_bounds",
    "create_rectangle",
    "create_square",
    "points_match",
    "polygon_area",
    "shared_vertex_count",
    "shares_edge",
    "signed_area",
]


Point = tuple[float, float]
Polygon = list[Point]

#: Absolute per-coordinate tolerance (mm) used when matching vertices.
POINT_TOLERANCE = 0.01


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned extent of one or more polygons."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_mapping(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


def create_rectangle(x: float, y: float, width: float, height: float) -> Polygon:
    """Return ``[top-left, top-right, bottom-right, bottom-left]`` for the cell."""

    return [
        (x, y),
        (x + width, y),
        (x + width, y + height),
        (x, y + height),
    ]


def create_square(x: float, y: float, size: float) -> Polygon:
    return create_rectangle(x, y, size, size)


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace area; the sign encodes the winding of ``polygon``."""

    if len(polygon) < 3:
        return 0.0
    total = 0.0
    for (x0, y0), (x1, y1) in zip(polygon, list(polygon[1:]) + [polygon[0]]):
        total += x0 * y1 - x1 * y0
    return total * 0.5


def polygon_area(polygon: Sequence[Point]) -> float:
    return abs(signed_area(polygon))


def calculate_bounds(polygons: Iterable[Sequence[Point]]) -> BoundingBox:
    """Union bounding box over every vertex of every polygon."""

    vertices = [point for polygon in polygons for point in polygon]
    if not vertices:
        raise ValueError("Cannot compute bounds without any vertices.")
    array = np.asarray(vertices, dtype=float)
    min_x, min_y = array.min(axis=0)
    max_x, max_y = array.max(axis=0)
    return BoundingBox(float(min_x), float(min_y), float(max_x), float(max_y))


def points_match(a: Point, b: Point, tolerance: float = POINT_TOLERANCE) -> bool:
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def shared_vertex_count(
    first: Sequence[Point],
    second: Sequence[Point],
    tolerance: float = POINT_TOLERANCE,
) -> int:
    """Count vertices of ``first`` that coincide with some vertex of ``second``."""

    return sum(
        1 for point in first if any(points_match(point, other, tolerance) for other in second)
    )


def shares_edge(
    first: Sequence[Point],
    second: Sequence[Point],
    tolerance: float = POINT_TOLERANCE,
) -> bool:
    """Heuristic edge-adjacency test.

    Two shared vertices are taken as evidence of a shared edge. Polygons that
    touch at two non-adjacent vertices are misclassified as neighbours; the
    colour assignment was tuned against this behaviour, so it is kept as is.
    """

    return shared_vertex_count(first, second, tolerance) >= 2
