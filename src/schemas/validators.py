"""Utilities for validating tessellation configurations and saved patterns."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import json

import yaml
from jsonschema import Draft202012Validator, ValidationError

from tessellation.model import TessellationConfig

CONFIG_SCHEMA_NAME = "tessellation_config.yaml"
PATTERN_BUNDLE_SCHEMA_NAME = "pattern_bundle.yaml"

__all__ = [
    "CONFIG_SCHEMA_NAME",
    "PATTERN_BUNDLE_SCHEMA_NAME",
    "SchemaValidationError",
    "load_config",
    "load_payload",
    "load_schema",
    "validate_config_payload",
    "validate_pattern_bundle",
]


class SchemaValidationError(RuntimeError):
    """Raised when an instance fails schema validation."""

    def __init__(self, errors: Iterable[ValidationError | str]):
        self.errors = tuple(errors)
        message = "Schema validation failed:\n" + "\n".join(_format_error(e) for e in self.errors)
        super().__init__(message)


def _schema_dir() -> Path:
    return Path(__file__).resolve().parent


@lru_cache(maxsize=4)
def load_schema(name: str = CONFIG_SCHEMA_NAME) -> Mapping[str, Any]:
    """Load and cache a schema definition by name."""

    schema_path = _schema_dir() / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema '{name}' not found at {schema_path}")

    with schema_path.open("r", encoding="utf-8") as handle:
        schema = yaml.safe_load(handle)

    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema '{name}' must decode to a mapping, received {type(schema)!r}")

    return schema


def load_payload(path: Path) -> Any:
    """Load a JSON or YAML payload from disk."""

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(handle)
        if suffix == ".json":
            return json.load(handle)
    raise ValueError(f"Unsupported payload extension '{suffix}' for {path}")


def _validate(instance: Any, schema_name: str) -> None:
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda exc: [str(part) for part in exc.path])
    if errors:
        raise SchemaValidationError(errors)


def validate_config_payload(instance: Any, *, schema_name: str = CONFIG_SCHEMA_NAME) -> None:
    """Validate a configuration mapping, including the colour weight count."""

    _validate(instance, schema_name)
    weights = instance.get("color_probabilities")
    if weights is not None and len(weights) != instance["colors"]:
        raise SchemaValidationError(
            [
                f"[color_probabilities] expected {instance['colors']} weights, "
                f"received {len(weights)}"
            ]
        )


def validate_pattern_bundle(
    instance: Any, *, schema_name: str = PATTERN_BUNDLE_SCHEMA_NAME
) -> None:
    """Validate *instance* against the saved pattern schema."""

    _validate(instance, schema_name)


def load_config(path: Path) -> TessellationConfig:
    """Load, validate and build a :class:`TessellationConfig` from *path*."""

    instance = load_payload(path)
    if not isinstance(instance, Mapping):
        raise TypeError("Configuration payload must be a mapping.")

    validate_config_payload(instance)
    return TessellationConfig.from_mapping(instance)


def _format_error(error: ValidationError | str) -> str:
    if isinstance(error, str):
        return error
    location = " / ".join(str(component) for component in error.absolute_path)
    prefix = f"[{location}] " if location else ""
    return f"{prefix}{error.message}"
