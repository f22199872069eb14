"""Seam allowance: offset a closed polygon with mitred corners."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .geometry import Point, Polygon, signed_area
from .model import Piece

__all__ = [
    "DEGENERATE_EDGE_LENGTH",
    "MITER_LIMIT",
    "PARALLEL_EPSILON",
    "offset_pieces",
    "offset_polygon",
]


DEGENERATE_EDGE_LENGTH = 1e-4
PARALLEL_EPSILON = 1e-4
#: Maximum miter length as a multiple of the offset distance.
MITER_LIMIT = 10.0


def _unit(dx: float, dy: float) -> tuple[float, float] | None:
    length = math.hypot(dx, dy)
    if length < DEGENERATE_EDGE_LENGTH:
        return None
    return dx / length, dy / length


def _outward_normal(direction: tuple[float, float], clockwise: bool) -> tuple[float, float]:
    ux, uy = direction
    if clockwise:
        return -uy, ux
    return uy, -ux


def offset_polygon(polygon: Sequence[Point], distance: float) -> Polygon:
    """Offset ``polygon`` by ``distance`` (positive grows, negative shrinks).

    Each vertex becomes the intersection of its two neighbouring edges after
    they are shifted along their outward normals. Miters longer than
    ``MITER_LIMIT`` times the distance are replaced by a two-point bevel, and
    nearly parallel edges fall back to the midpoint of the shifted endpoints.
    Vertices touching a zero-length edge are dropped.
    """

    if distance == 0:
        return list(polygon)

    count = len(polygon)
    clockwise = signed_area(polygon) < 0
    max_distance = abs(distance) * MITER_LIMIT
    result: Polygon = []

    for index in range(count):
        prev = polygon[index - 1]
        curr = polygon[index]
        nxt = polygon[(index + 1) % count]

        incoming = _unit(curr[0] - prev[0], curr[1] - prev[1])
        outgoing = _unit(nxt[0] - curr[0], nxt[1] - curr[1])
        if incoming is None or outgoing is None:
            continue

        n1x, n1y = _outward_normal(incoming, clockwise)
        n2x, n2y = _outward_normal(outgoing, clockwise)

        p1 = (prev[0] + n1x * distance, prev[1] + n1y * distance)
        p2 = (curr[0] + n1x * distance, curr[1] + n1y * distance)
        p3 = (curr[0] + n2x * distance, curr[1] + n2y * distance)
        p4 = (nxt[0] + n2x * distance, nxt[1] + n2y * distance)

        d1 = (p2[0] - p1[0], p2[1] - p1[1])
        d2 = (p4[0] - p3[0], p4[1] - p3[1])
        denom = d1[0] * d2[1] - d1[1] * d2[0]

        if abs(denom) <= PARALLEL_EPSILON:
            result.append(((p2[0] + p3[0]) / 2, (p2[1] + p3[1]) / 2))
            continue

        t = ((p3[0] - p1[0]) * d2[1] - (p3[1] - p1[1]) * d2[0]) / denom
        intersection = (p1[0] + t * d1[0], p1[1] + t * d1[1])
        if math.dist(intersection, curr) <= max_distance:
            result.append(intersection)
        else:
            result.append(p2)
            result.append(p3)

    return result


def offset_pieces(pieces: Iterable[Piece], distance: float) -> list[Piece]:
    """Offset copies of ``pieces``; the originals are left untouched."""

    return [piece.with_polygon(offset_polygon(piece.polygon, distance)) for piece in pieces]
