"""Validation and coercion of individual option values.

Each option declares an `OptionKind`. `validate_option` checks a raw value
against that kind and returns the normalized value that is stored on the
chart. Validation is pure: the input is never mutated and the same input
always yields the same value or the same error.
"""

from __future__ import annotations

import math
from numbers import Real

import numpy as np

from .colors import Color, normalize_color_spec
from .errors import InvalidColor, InvalidOptionType, InvalidOptionValue
from .schema import OptionKind


def validate_option(value: object, kind: OptionKind, option_name: str) -> object:
    """Validate and normalize a raw option value.

    Args:
        value: Raw value supplied by the caller.
        kind: Declared kind of the option.
        option_name: Target property name, used in error messages.

    Returns:
        The normalized value (Python numbers, tuples, canonical strings,
        Colors, or the validated object).

    Raises:
        InvalidOptionType: When the value is not of the declared kind.
        InvalidOptionValue: When a string is not one of the allowed values.
        InvalidColor: When a color option cannot be normalized.
    """

    if kind.tag == "scalar":
        return _scalar(value, kind, option_name)
    if kind.tag == "boolean":
        return _boolean(value, kind, option_name)
    if kind.tag == "vector":
        return _vector(value, kind, option_name)
    if kind.tag == "string_enum":
        if not isinstance(value, str):
            raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
        return _match_enum(value, kind.allowed or (), option_name)
    if kind.tag == "bool_or_string_enum":
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        if not isinstance(value, str):
            raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
        if kind.allowed is None:
            return value
        return _match_enum(value, kind.allowed, option_name)
    if kind.tag == "object":
        if kind.object_type is None or not isinstance(value, kind.object_type):
            raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
        return value
    if kind.tag == "color":
        if isinstance(value, Color):
            return value
        try:
            return normalize_color_spec(value)
        except InvalidColor as exc:
            raise InvalidColor(exc.value, reason=exc.reason, option_name=option_name) from exc
    if kind.tag == "text":
        if not isinstance(value, str):
            raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
        return value
    raise ValueError(f"Unsupported option kind: {kind.tag!r}")


def _is_number(value: object) -> bool:
    return isinstance(value, (Real, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))


def _plain(value: object) -> int | float:
    """Convert numpy scalars to Python numbers."""

    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    return value  # type: ignore[return-value]


def _scalar(value: object, kind: OptionKind, option_name: str) -> int | float:
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value[()]
    if not _is_number(value) or not math.isfinite(float(value)):  # type: ignore[arg-type]
        raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
    return _plain(value)


def _boolean(value: object, kind: OptionKind, option_name: str) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if _is_number(value) and float(value) in (0.0, 1.0):  # type: ignore[arg-type]
        return bool(value)
    raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)


def _vector(value: object, kind: OptionKind, option_name: str) -> tuple[int | float, ...]:
    if _is_number(value):
        value = (value,)
    if not isinstance(value, (list, tuple, np.ndarray)):
        raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
    array = np.asarray(value, dtype=object) if not isinstance(value, np.ndarray) else value
    if array.ndim > 1 or not all(_is_number(item) and math.isfinite(float(item)) for item in array.ravel()):
        raise InvalidOptionType(option_name=option_name, expected=kind.describe(), value=value)
    return tuple(_plain(item) for item in array.ravel())


def _match_enum(value: str, allowed: tuple[str, ...], option_name: str) -> str:
    """Return the canonical spelling of `value` within `allowed`."""

    folded = value.strip().casefold()
    for candidate in allowed:
        if candidate.casefold() == folded:
            return candidate
    raise InvalidOptionValue(option_name=option_name, allowed=allowed, value=value)
