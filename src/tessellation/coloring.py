"""Greedy, adjacency-aware colour assignment."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .geometry import POINT_TOLERANCE, shares_edge
from .model import Piece

__all__ = ["assign_colors", "forbidden_colors", "weighted_choice"]


def weighted_choice(
    candidates: Sequence[int],
    weights: Sequence[float],
    rng: np.random.Generator,
) -> int:
    """Pick a candidate colour proportionally to its weight.

    Colours without a configured weight count as zero; if every candidate has
    zero weight the pick is uniform.
    """

    candidate_weights = [
        float(weights[color]) if 0 <= color < len(weights) else 0.0 for color in candidates
    ]
    total = sum(candidate_weights)
    if total <= 0:
        return int(candidates[int(rng.integers(len(candidates)))])

    remaining = rng.random() * total
    for color, weight in zip(candidates, candidate_weights):
        remaining -= weight
        if remaining <= 0:
            return int(color)
    return int(candidates[-1])


def forbidden_colors(
    pieces: Sequence[Piece],
    index: int,
    same_color_probability: float,
    rng: np.random.Generator,
    tolerance: float = POINT_TOLERANCE,
) -> set[int]:
    """Colours of already-coloured neighbours that piece ``index`` must avoid.

    Each neighbour is re-rolled independently: its colour stays allowed with
    probability ``same_color_probability``.
    """

    piece = pieces[index]
    forbidden: set[int] = set()
    for other in pieces[:index]:
        if other.color_index is None:
            continue
        if not shares_edge(piece.polygon, other.polygon, tolerance):
            continue
        if rng.random() > same_color_probability:
            forbidden.add(other.color_index)
    return forbidden


def assign_colors(
    pieces: Sequence[Piece],
    num_colors: int,
    same_color_probability: float,
    color_weights: Sequence[float],
    rng: np.random.Generator,
    tolerance: float = POINT_TOLERANCE,
) -> None:
    """Colour ``pieces`` in place, in list order, without backtracking."""

    for index, piece in enumerate(pieces):
        forbidden = forbidden_colors(pieces, index, same_color_probability, rng, tolerance)
        available = [color for color in range(num_colors) if color not in forbidden]
        if available:
            piece.color_index = weighted_choice(available, color_weights, rng)
        else:
            piece.color_index = int(rng.integers(num_colors))
