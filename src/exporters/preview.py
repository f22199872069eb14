"""Quick-look raster previews of generated patterns."""

from __future__ import annotations

import colorsys
import re
from importlib import util as importlib_util
from pathlib import Path
from typing import Sequence

from tessellation.model import TessellationResult

__all__ = ["FALLBACK_COLOR", "palette_rgba", "render_preview"]


FALLBACK_COLOR = "#cccccc"
_HSL_PATTERN = re.compile(
    r"hsl\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)", re.IGNORECASE
)


def palette_rgba(color: str, alpha: float = 1.0) -> tuple[float, float, float, float]:
    """Convert a palette entry (hex, named or ``hsl(...)``) to an RGBA tuple."""

    match = _HSL_PATTERN.fullmatch(color.strip())
    if match:
        hue, saturation, lightness = (float(value) for value in match.groups())
        red, green, blue = colorsys.hls_to_rgb(hue / 360.0, lightness / 100.0, saturation / 100.0)
        return red, green, blue, alpha

    from matplotlib import colors as mcolors

    red, green, blue, _ = mcolors.to_rgba(color)
    return red, green, blue, alpha


def render_preview(
    result: TessellationResult,
    palette: Sequence[str],
    output_path: Path,
    *,
    sewing_result: TessellationResult | None = None,
    dpi: int = 150,
) -> Path | None:
    """Render filled pieces to an image if matplotlib is available.

    When ``sewing_result`` is supplied (the pattern before seam allowance), its
    outlines are drawn dashed on top of the cut pieces.
    """

    if importlib_util.find_spec("matplotlib") is None:
        print("matplotlib not installed; skipping pattern preview.")
        return None

    import matplotlib

    matplotlib.use("Agg")
    from matplotlib import pyplot as plt
    from matplotlib.patches import Polygon as PolygonPatch

    fill_alpha = 0.3 if sewing_result is not None else 1.0
    fig, ax = plt.subplots(figsize=(8.0, 8.0 * max(result.height, 1e-9) / max(result.width, 1e-9)))
    for piece in result.pieces:
        index = piece.color_index
        color = palette[index] if index is not None and 0 <= index < len(palette) else FALLBACK_COLOR
        ax.add_patch(
            PolygonPatch(
                piece.polygon,
                closed=True,
                facecolor=palette_rgba(color, fill_alpha),
                edgecolor="black",
                linewidth=0.5,
            )
        )

    if sewing_result is not None:
        for piece in sewing_result.pieces:
            ax.add_patch(
                PolygonPatch(
                    piece.polygon,
                    closed=True,
                    fill=False,
                    edgecolor="#666666",
                    linewidth=0.8,
                    linestyle="--",
                )
            )

    ax.set_xlim(result.bounds.min_x, result.bounds.max_x)
    # Pattern space grows downward like SVG.
    ax.set_ylim(result.bounds.max_y, result.bounds.min_y)
    ax.set_aspect("equal")
    ax.set_axis_off()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
