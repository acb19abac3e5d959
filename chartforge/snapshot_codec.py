"""Snapshot encoding/decoding helpers for ChartSpec values."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, cast

import numpy as np

from .builder import CHART_NAMES, build_chart
from .colors import Color
from .errors import InvalidArgument
from .schema import ChartSpec, Fill, make_fill

SNAPSHOT_VERSION = "chartforge_spec_v1"

# Stored in place of non-finite numbers, which JSON cannot represent.
_NON_FINITE = {"Infinity": math.inf, "-Infinity": -math.inf}


def encode_chart_spec(spec: ChartSpec) -> dict[str, Any]:
    """Encode a ChartSpec into a JSON-serializable dictionary.

    Args:
        spec: ChartSpec to encode.

    Returns:
        Dict payload safe for strict ``json.dumps``. Colors are stored as CSS
        strings, missing points as None, and infinities as ``"Infinity"`` /
        ``"-Infinity"``.
    """

    numeric_labels = not all(isinstance(label, str) for label in spec.labels)
    return {
        "version": SNAPSHOT_VERSION,
        "kind": spec.kind,
        "chart_id": spec.chart_id,
        "numeric_labels": numeric_labels,
        "labels": [_encode_point(label) for label in spec.labels] if numeric_labels else list(spec.labels),
        "series": [[_encode_point(value) for value in series.values] for series in spec.series],
        "options": {name: _encode_value(value) for name, value in spec.options.items()},
    }


def decode_chart_spec(payload: Mapping[str, Any]) -> ChartSpec:
    """Decode a ChartSpec from a stored payload dictionary.

    The payload is rebuilt through `build_chart` in strict mode, so a
    decoded spec satisfies the same validation as a freshly built one.

    Args:
        payload: Payload previously produced by `encode_chart_spec`.

    Returns:
        ChartSpec instance.

    Raises:
        InvalidArgument: When required fields are missing or malformed.
        InvalidOptionType: When a stored option no longer validates.
        InvalidOptionValue: When a stored option no longer validates.
        InvalidColor: When a stored color cannot be normalized.
    """

    kind = payload.get("kind")
    if kind not in CHART_NAMES:
        raise InvalidArgument(f"Snapshot has unsupported chart kind: {kind!r}.")

    series_raw = payload.get("series")
    if not isinstance(series_raw, list) or not series_raw:
        raise InvalidArgument("Snapshot must contain at least one series.")
    if len({len(column) for column in series_raw if isinstance(column, list)}) != 1 or not all(
        isinstance(column, list) for column in series_raw
    ):
        raise InvalidArgument("Snapshot series must be lists of equal length.")
    try:
        data = np.array(
            [[_decode_point(value) for value in column] for column in series_raw],
            dtype=float,
        ).T
    except (TypeError, ValueError) as exc:
        raise InvalidArgument("Snapshot series must contain only numbers or null.") from exc

    items: list[object] = []
    options_raw = cast(Mapping[str, Any], payload.get("options") or {})
    for name, value in options_raw.items():
        items.extend((name, _decode_value(name, value)))
    chart_id = payload.get("chart_id")
    if chart_id is not None:
        items.extend(("chartId", chart_id))

    labels = payload.get("labels")
    if payload.get("numeric_labels") and isinstance(labels, list):
        labels = [_decode_point(label) for label in labels]
    return build_chart(kind, data, labels, *items, strict=True)


def _encode_point(value: object) -> object:
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _decode_point(value: object) -> object:
    if value is None:
        return math.nan
    if isinstance(value, str) and value in _NON_FINITE:
        return _NON_FINITE[value]
    return value


def _encode_value(value: object) -> object:
    """Encode an option value for JSON storage."""

    if isinstance(value, Color):
        return value.css()
    if isinstance(value, Fill):
        return {
            "target": value.target,
            "above": value.above.css() if value.above is not None else None,
            "below": value.below.css() if value.below is not None else None,
        }
    if isinstance(value, tuple):
        return [_encode_value(item) for item in value]
    return value


def _decode_value(name: str, value: object) -> object:
    """Decode a stored option value back into builder input."""

    if name.casefold() == "fill" and isinstance(value, Mapping):
        if "target" not in value:
            raise InvalidArgument("Snapshot fill option requires a target.")
        return make_fill(value["target"], above=value.get("above"), below=value.get("below"))
    return value
