from __future__ import annotations

import re

import numpy as np
import pytest

from tessellation.geometry import create_rectangle
from tessellation.model import (
    DEFAULT_CONFIG,
    DEFAULT_PALETTE,
    Piece,
    PiecePosition,
    TessellationConfig,
    equal_color_weights,
    initial_palette,
    normalize_color_weights,
    random_palette_color,
    reconcile_color_weights,
    reconcile_palette,
)

HSL_PATTERN = re.compile(r"^hsl\((\d+), (\d+)%, (\d+)%\)$")


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 7])
def test_equal_weights_sum_to_one_hundred(count: int) -> None:
    weights = equal_color_weights(count)

    assert len(weights) == count
    assert sum(weights) == pytest.approx(100.0)


def test_equal_weights_for_three_colours() -> None:
    weights = equal_color_weights(3)

    assert weights[:2] == (33.33, 33.33)
    assert weights[2] == pytest.approx(33.34)


def test_equal_weights_reject_non_positive_count() -> None:
    with pytest.raises(ValueError):
        equal_color_weights(0)


def test_normalize_rescales_to_one_hundred() -> None:
    assert normalize_color_weights([1, 1, 2]) == pytest.approx((25.0, 25.0, 50.0))
    assert normalize_color_weights([0, 0]) == (0.0, 0.0)


def test_reconcile_grows_with_equal_shares() -> None:
    weights = reconcile_color_weights((60.0, 40.0), 4)

    assert len(weights) == 4
    assert sum(weights) == pytest.approx(100.0)
    # 60, 40, 25, 25 rescaled by 100 / 150.
    assert weights == pytest.approx((40.0, 80.0 / 3.0, 50.0 / 3.0, 50.0 / 3.0))


def test_reconcile_shrinks_by_truncating() -> None:
    weights = reconcile_color_weights((50.0, 30.0, 20.0), 2)

    assert weights == pytest.approx((62.5, 37.5))


def test_default_config_values() -> None:
    assert DEFAULT_CONFIG.rows == 8
    assert DEFAULT_CONFIG.cols == 10
    assert DEFAULT_CONFIG.square_size == 50.0
    assert DEFAULT_CONFIG.colors == 3
    assert DEFAULT_CONFIG.seam_allowance == pytest.approx(6.35)
    assert sum(DEFAULT_CONFIG.color_probabilities) == pytest.approx(100.0)
    assert DEFAULT_CONFIG.seed is None


def test_with_colors_reconciles_weights() -> None:
    config = TessellationConfig(colors=2, color_probabilities=(70.0, 30.0))

    widened = config.with_colors(3)

    assert widened.colors == 3
    assert len(widened.color_probabilities) == 3
    assert sum(widened.color_probabilities) == pytest.approx(100.0)
    assert config.colors == 2


def test_config_mapping_round_trip() -> None:
    config = TessellationConfig(rows=4, cols=6, colors=2, color_probabilities=(80.0, 20.0), seed=9)

    restored = TessellationConfig.from_mapping(config.to_mapping())

    assert restored == config


def test_config_from_partial_mapping_uses_defaults() -> None:
    config = TessellationConfig.from_mapping({"rows": 3, "cols": 4, "colors": 4})

    assert config.rows == 3
    assert config.square_size == DEFAULT_CONFIG.square_size
    assert config.color_probabilities == equal_color_weights(4)
    assert config.seed is None


def test_piece_mapping_round_trip() -> None:
    piece = Piece(
        id="r1-c2-right",
        polygon=create_rectangle(0.0, 0.0, 10.0, 5.0)[:3],
        row=1,
        col=3,
        grid_col=2,
        position=PiecePosition.BOTTOM,
        is_triangle=True,
        color_index=1,
    )

    payload = piece.to_mapping()

    assert payload["position"] == "bottom"
    assert payload["polygon"][0] == [0.0, 0.0]
    assert Piece.from_mapping(payload) == piece


def test_piece_from_mapping_defaults() -> None:
    piece = Piece.from_mapping(
        {"id": "p", "polygon": [[0, 0], [1, 0], [1, 1]], "row": 0, "col": 4, "color_index": None}
    )

    assert piece.grid_col == 4
    assert piece.position is PiecePosition.FULL
    assert piece.color_index is None
    assert not piece.is_triangle


def test_with_polygon_keeps_identity() -> None:
    piece = Piece("a", [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], 0, 0, 0, PiecePosition.FULL, color_index=2)

    moved = piece.with_polygon([(5.0, 5.0), (6.0, 5.0), (6.0, 6.0)])

    assert moved.id == "a"
    assert moved.color_index == 2
    assert piece.polygon[0] == (0.0, 0.0)


def test_random_palette_colour_ranges() -> None:
    rng = np.random.default_rng(3)
    for _ in range(200):
        match = HSL_PATTERN.match(random_palette_color(rng))
        assert match is not None
        hue, saturation, lightness = (int(group) for group in match.groups())
        assert 0 <= hue < 360
        assert 40 <= saturation < 80
        assert 40 <= lightness < 60


def test_initial_palette_starts_with_defaults() -> None:
    rng = np.random.default_rng(1)

    assert initial_palette(2, rng) == list(DEFAULT_PALETTE[:2])
    palette = initial_palette(5, rng)
    assert palette[:3] == list(DEFAULT_PALETTE)
    assert all(HSL_PATTERN.match(color) for color in palette[3:])


def test_reconcile_palette_truncates_and_extends() -> None:
    rng = np.random.default_rng(2)
    palette = ["#000000", "#111111", "#222222"]

    assert reconcile_palette(palette, 2, rng) == ["#000000", "#111111"]
    extended = reconcile_palette(palette, 4, rng)
    assert extended[:3] == palette
    assert HSL_PATTERN.match(extended[3])
