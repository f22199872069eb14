"""Pipelines behind the brickwork sub-commands."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__all__ = [
    "apply_seams_to_bundle",
    "apply_seams_main",
    "build_config",
    "generate_pattern_bundle",
    "generate_pattern_main",
]

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    "apply_seams_to_bundle": ("brickwork.pipelines.apply_seams", "apply_seams_to_bundle"),
    "apply_seams_main": ("brickwork.pipelines.apply_seams", "main"),
    "build_config": ("brickwork.pipelines.generate_pattern", "build_config"),
    "generate_pattern_bundle": ("brickwork.pipelines.generate_pattern", "generate_pattern"),
    "generate_pattern_main": ("brickwork.pipelines.generate_pattern", "main"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    try:
        module_name, attribute = _LAZY_IMPORTS[name]
    except KeyError as exc:  # pragma: no cover - attribute errors fall through
        raise AttributeError(f"module 'brickwork.pipelines' has no attribute {name!r}") from exc

    module = import_module(module_name)
    value = getattr(module, attribute)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - interactive helper
    return sorted(__all__)
