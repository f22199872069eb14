"""Brick-offset layout generation and seam allowance application."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

import numpy as np

from .coloring import assign_colors
from .geometry import calculate_bounds, create_rectangle
from .model import Piece, PiecePosition, TessellationConfig, TessellationResult
from .seam_offset import offset_pieces
from .splitter import split_rectangle

__all__ = [
    "apply_seam_allowance",
    "generate_dimensions",
    "generate_tessellation",
    "group_by_color",
    "resolve_rng",
]


def generate_dimensions(
    count: int,
    base_size: float,
    variation: float,
    rng: np.random.Generator,
) -> list[float]:
    """Sample ``count`` sizes around ``base_size`` that sum to ``count * base_size``.

    Each raw sample is ``base_size * (1 + u * variation)`` with ``u`` uniform in
    ``[-1, 1)``; the samples are then rescaled together to hit the total.
    """

    if variation == 0:
        return [float(base_size)] * count

    target_total = count * base_size
    sizes = [base_size * (1 + (rng.random() * 2 - 1) * variation) for _ in range(count)]
    scale = target_total / sum(sizes)
    return [size * scale for size in sizes]


def resolve_rng(config: TessellationConfig) -> tuple[TessellationConfig, np.random.Generator]:
    """Build the generator for ``config``, recording a fresh seed when none is set."""

    if config.seed is None:
        seed = int(np.random.SeedSequence().generate_state(1)[0])
        config = replace(config, seed=seed)
    return config, np.random.default_rng(config.seed)


def _layout_pieces(config: TessellationConfig, rng: np.random.Generator) -> list[Piece]:
    widths = [
        generate_dimensions(config.cols, config.square_size, config.width_variation, rng)
        for _ in range(config.rows)
    ]
    heights = generate_dimensions(config.rows, config.square_size, config.height_variation, rng)
    is_triangle = config.split_angle_variation == 0

    pieces: list[Piece] = []
    y = 0.0
    for row in range(config.rows):
        height = heights[row]
        offset_x = (row % 2) * config.offset_amount * config.square_size
        x = 0.0
        piece_col = 0
        for grid_col in range(config.cols):
            width = widths[row][grid_col]
            rect = create_rectangle(x + offset_x, y, width, height)
            if rng.random() < config.split_probability:
                first, second = split_rectangle(rect, config.split_angle_variation, rng)
                pieces.append(
                    Piece(
                        id=f"r{row}-c{grid_col}-left",
                        polygon=first,
                        row=row,
                        col=piece_col,
                        grid_col=grid_col,
                        position=PiecePosition.TOP,
                        is_triangle=is_triangle,
                    )
                )
                pieces.append(
                    Piece(
                        id=f"r{row}-c{grid_col}-right",
                        polygon=second,
                        row=row,
                        col=piece_col + 1,
                        grid_col=grid_col,
                        position=PiecePosition.BOTTOM,
                        is_triangle=is_triangle,
                    )
                )
                piece_col += 2
            else:
                pieces.append(
                    Piece(
                        id=f"r{row}-c{grid_col}-full",
                        polygon=rect,
                        row=row,
                        col=piece_col,
                        grid_col=grid_col,
                        position=PiecePosition.FULL,
                    )
                )
                piece_col += 1
            x += width
        y += height
    return pieces


def generate_tessellation(
    config: TessellationConfig,
    rng: np.random.Generator | None = None,
) -> TessellationResult:
    """Lay out, split and colour a brick pattern for ``config``.

    When ``rng`` is omitted the generator is seeded from ``config.seed`` (a
    seed is drawn and stored on the result's config if none was given), so
    the returned result can always be regenerated exactly.
    """

    if rng is None:
        config, rng = resolve_rng(config)

    pieces = _layout_pieces(config, rng)
    assign_colors(
        pieces,
        config.colors,
        config.same_color_probability,
        config.color_probabilities,
        rng,
    )
    bounds = calculate_bounds(piece.polygon for piece in pieces)
    return TessellationResult(pieces=pieces, config=config, bounds=bounds)


def apply_seam_allowance(
    result: TessellationResult,
    seam_allowance: float | None = None,
) -> TessellationResult:
    """Return a copy of ``result`` with every piece grown by the seam allowance.

    The pieces of ``result`` are not modified and stay usable as sewing lines.
    """

    distance = result.config.seam_allowance if seam_allowance is None else seam_allowance
    if distance == 0:
        return result
    pieces = offset_pieces(result.pieces, distance)
    bounds = calculate_bounds(piece.polygon for piece in pieces)
    return replace(result, pieces=pieces, bounds=bounds)


def group_by_color(pieces: Iterable[Piece]) -> dict[int | None, list[Piece]]:
    """Group pieces by colour index in first-seen order."""

    groups: dict[int | None, list[Piece]] = {}
    for piece in pieces:
        groups.setdefault(piece.color_index, []).append(piece)
    return groups
