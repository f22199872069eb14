"""Brick-pattern tessellation engine."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "BoundingBox",
    "DEFAULT_CONFIG",
    "DEFAULT_PALETTE",
    "Piece",
    "PiecePosition",
    "TessellationConfig",
    "TessellationResult",
    "apply_seam_allowance",
    "assign_colors",
    "calculate_bounds",
    "create_rectangle",
    "generate_tessellation",
    "group_by_color",
    "offset_pieces",
    "offset_polygon",
    "reconcile_color_weights",
    "split_rectangle",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "BoundingBox": ".geometry",
    "calculate_bounds": ".geometry",
    "create_rectangle": ".geometry",
    "DEFAULT_CONFIG": ".model",
    "DEFAULT_PALETTE": ".model",
    "Piece": ".model",
    "PiecePosition": ".model",
    "TessellationConfig": ".model",
    "TessellationResult": ".model",
    "reconcile_color_weights": ".model",
    "apply_seam_allowance": ".layout",
    "generate_tessellation": ".layout",
    "group_by_color": ".layout",
    "assign_colors": ".coloring",
    "offset_pieces": ".seam_offset",
    "offset_polygon": ".seam_offset",
    "split_rectangle": ".splitter",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:
        raise AttributeError(f"module 'tessellation' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
