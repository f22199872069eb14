from __future__ import annotations

from pathlib import Path

import pytest

import exporters.preview as preview
from tessellation.layout import apply_seam_allowance, generate_tessellation
from tessellation.model import TessellationConfig


def test_hsl_colours_are_converted() -> None:
    assert preview.palette_rgba("hsl(0, 100%, 50%)") == pytest.approx((1.0, 0.0, 0.0, 1.0))
    assert preview.palette_rgba("hsl(120, 100%, 25%)", 0.5) == pytest.approx((0.0, 0.5, 0.0, 0.5))


def test_hex_colours_are_converted() -> None:
    red, green, blue, alpha = preview.palette_rgba("#4A90E2", 0.3)

    assert (red, green, blue) == pytest.approx((0x4A / 255, 0x90 / 255, 0xE2 / 255))
    assert alpha == 0.3


def test_render_preview_writes_image(tmp_path: Path) -> None:
    pytest.importorskip("matplotlib")
    result = generate_tessellation(TessellationConfig(rows=3, cols=3, seed=12))
    seamed = apply_seam_allowance(result)

    output = preview.render_preview(
        seamed,
        ["#4A90E2", "hsl(200, 50%, 45%)"],
        tmp_path / "previews" / "pattern.png",
        sewing_result=result,
        dpi=40,
    )

    assert output == tmp_path / "previews" / "pattern.png"
    assert output.stat().st_size > 0


def test_render_preview_skips_without_matplotlib(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    result = generate_tessellation(TessellationConfig(rows=2, cols=2, seed=1))
    monkeypatch.setattr(preview.importlib_util, "find_spec", lambda name: None)

    output = preview.render_preview(result, ["#000000"], tmp_path / "pattern.png")

    assert output is None
    assert not (tmp_path / "pattern.png").exists()
    assert "skipping pattern preview" in capsys.readouterr().out
