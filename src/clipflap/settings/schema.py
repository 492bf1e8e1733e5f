"""Schema helpers for the clip widget options."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..config import (
    DEFAULT_CLIP_SIZE,
    DEFAULT_ERROR_MESSAGES,
    DEFAULT_OVERFLOW,
    DEFAULT_VIEW_SIZE,
)
from ..core.geometry import Size
from ..errors import SettingsValidationError

_SIZE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
    },
    "additionalProperties": False,
}

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "clipflap/options.schema.json",
    "type": "object",
    "required": ["view_size", "clip_size", "overflow", "error_messages"],
    "properties": {
        "view_size": _SIZE_SCHEMA,
        "clip_size": _SIZE_SCHEMA,
        "overflow": {"type": "boolean"},
        "error_messages": {
            "type": "object",
            "required": ["invalid_image_file"],
            "properties": {
                "invalid_image_file": {"type": "string"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "view_size": {"width": DEFAULT_VIEW_SIZE[0], "height": DEFAULT_VIEW_SIZE[1]},
    "clip_size": {"width": DEFAULT_CLIP_SIZE[0], "height": DEFAULT_CLIP_SIZE[1]},
    "overflow": DEFAULT_OVERFLOW,
    "error_messages": dict(DEFAULT_ERROR_MESSAGES),
}

_validator = Draft202012Validator(OPTIONS_SCHEMA)

# Nested objects replaced wholesale; a partial size would be ambiguous.
_WHOLE_VALUE_KEYS = {"view_size", "clip_size"}


@dataclass(frozen=True)
class ErrorMessages:
    invalid_image_file: str = DEFAULT_ERROR_MESSAGES["invalid_image_file"]


@dataclass(frozen=True)
class ClipOptions:
    """Validated configuration of a clip widget."""

    view_size: Size
    clip_size: Size
    overflow: bool
    error_messages: ErrorMessages


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_OPTIONS)
    if data:
        for key, value in data.items():
            if key == "error_messages" and isinstance(value, Mapping):
                merged["error_messages"].update(value)
                continue
            if key in _WHOLE_VALUE_KEYS and isinstance(value, Mapping):
                merged[key] = dict(value)
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def load_options(data: Mapping[str, Any] | None = None) -> ClipOptions:
    """Return :class:`ClipOptions` for *data*, raising on invalid input."""

    try:
        merged = merge_with_defaults(data)
    except ValidationError as exc:
        raise SettingsValidationError(exc.message) from exc
    return ClipOptions(
        view_size=Size(float(merged["view_size"]["width"]), float(merged["view_size"]["height"])),
        clip_size=Size(float(merged["clip_size"]["width"]), float(merged["clip_size"]["height"])),
        overflow=bool(merged["overflow"]),
        error_messages=ErrorMessages(**merged["error_messages"]),
    )


__all__ = [
    "DEFAULT_OPTIONS",
    "OPTIONS_SCHEMA",
    "ClipOptions",
    "ErrorMessages",
    "load_options",
    "merge_with_defaults",
]
