"""Tests for the seam allowance polygon offset."""

from __future__ import annotations

import math

import pytest

from tessellation.geometry import create_rectangle, polygon_area
from tessellation.model import Piece, PiecePosition
from tessellation.seam_offset import MITER_LIMIT, offset_pieces, offset_polygon


def _assert_same_cycle(actual, expected, tol: float = 1e-6) -> None:
    assert len(actual) == len(expected)
    for shift in range(len(expected)):
        rotated = expected[shift:] + expected[:shift]
        if all(math.dist(a, b) <= tol for a, b in zip(actual, rotated)):
            return
    pytest.fail(f"{actual} is not a rotation of {expected}")


def test_square_grows_by_distance_on_every_side() -> None:
    square = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    result = offset_polygon(square, 1.0)

    _assert_same_cycle(result, [(-1.0, -1.0), (11.0, -1.0), (11.0, 11.0), (-1.0, 11.0)])


def test_reversed_winding_still_grows_outward() -> None:
    square = [(0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]

    result = offset_polygon(square, 2.0)

    _assert_same_cycle(result, [(-2.0, 12.0), (12.0, 12.0), (12.0, -2.0), (-2.0, -2.0)])


def test_rectangle_offset_is_orthogonal_expansion() -> None:
    rect = create_rectangle(20.0, 30.0, 47.5, 61.25)

    result = offset_polygon(rect, 6.35)

    _assert_same_cycle(result, create_rectangle(13.65, 23.65, 60.2, 73.95))


@pytest.mark.parametrize(
    "polygon",
    [
        [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)],
        [(0.0, 0.0), (50.0, 0.0), (50.0, 50.0)],
        [(3.5, 1.25), (9.0, 4.0), (2.0, 8.0), (-1.0, 3.0)],
    ],
)
def test_zero_offset_returns_identical_vertices(polygon) -> None:
    assert offset_polygon(polygon, 0) == polygon


def test_negative_offset_shrinks_square() -> None:
    square = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    result = offset_polygon(square, -1.0)

    _assert_same_cycle(result, [(1.0, 1.0), (9.0, 1.0), (9.0, 9.0), (1.0, 9.0)])


def test_right_triangle_miters_stay_within_limit() -> None:
    triangle = [(0.0, 0.0), (50.0, 0.0), (50.0, 50.0)]

    result = offset_polygon(triangle, 1.0)

    assert len(result) == 3
    assert polygon_area(result) > polygon_area(triangle)
    # 45 degree corners extend 1 / sin(22.5 deg) from the vertex.
    expected = 1.0 / math.sin(math.radians(22.5))
    assert math.dist(result[0], triangle[0]) == pytest.approx(expected)
    assert math.dist(result[1], triangle[1]) == pytest.approx(math.sqrt(2.0))


def test_acute_spike_is_bevelled() -> None:
    # Tip angle of about 2.3 degrees puts the miter far beyond the limit.
    sliver = [(0.0, 0.0), (100.0, 2.0), (0.0, 4.0)]

    result = offset_polygon(sliver, 1.0)

    assert len(result) == 4
    for point in result:
        nearest = min(math.dist(point, vertex) for vertex in sliver)
        assert nearest <= MITER_LIMIT * 1.0


def test_collinear_vertex_uses_parallel_fallback() -> None:
    polygon = [(0.0, 0.0), (5.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    result = offset_polygon(polygon, 1.0)

    assert len(result) == 5
    assert result[1] == pytest.approx((5.0, -1.0))


def test_degenerate_edge_vertices_are_skipped() -> None:
    polygon = [(0.0, 0.0), (10.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

    result = offset_polygon(polygon, 1.0)

    assert len(result) == 3
    assert result[0] == pytest.approx((-1.0, -1.0))
    assert result[-1] == pytest.approx((-1.0, 11.0))


def test_offset_pieces_preserves_originals_and_metadata() -> None:
    piece = Piece(
        id="r0-c0-full",
        polygon=create_rectangle(0.0, 0.0, 10.0, 10.0),
        row=0,
        col=0,
        grid_col=0,
        position=PiecePosition.FULL,
        color_index=2,
    )

    (offset,) = offset_pieces([piece], 1.0)

    assert piece.polygon == create_rectangle(0.0, 0.0, 10.0, 10.0)
    assert offset is not piece
    assert offset.id == piece.id
    assert offset.color_index == 2
    assert offset.position is PiecePosition.FULL
    _assert_same_cycle(offset.polygon, create_rectangle(-1.0, -1.0, 12.0, 12.0))
