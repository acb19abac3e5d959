"""Tests for chart snapshot encoding and decoding."""

from __future__ import annotations

import json

import numpy as np
import pytest

from chartforge.builder import build_chart, line_chart
from chartforge.errors import InvalidArgument
from chartforge.schema import make_fill
from chartforge.serializer import serialize_chart
from chartforge.snapshot_codec import SNAPSHOT_VERSION, decode_chart_spec, encode_chart_spec

pytestmark = pytest.mark.unit


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "version": SNAPSHOT_VERSION,
        "kind": "line",
        "chart_id": "snap",
        "labels": ["a", "b"],
        "series": [[1, 2]],
        "options": {},
    }
    payload.update(overrides)
    return payload


def test_snapshot_survives_json_and_serializes_identically() -> None:
    """Decode(encode(spec)) renders the same configuration after a JSON trip."""

    spec = line_chart(
        [[1, np.nan], [3, 4]],
        ["a", "b"],
        "borderColor",
        [255, 0, 0, 0.5],
        "backgroundColor",
        ["red", "#00FF00"],
        "fill",
        make_fill("origin", above="blue"),
        "borderDash",
        [5, 5],
        "chartId",
        "snap",
    )
    payload = json.loads(json.dumps(encode_chart_spec(spec)))
    assert payload["version"] == SNAPSHOT_VERSION
    assert payload["series"] == [[1.0, 3.0], [None, 4.0]]
    assert payload["options"]["fill"] == {"target": "origin", "above": "blue", "below": None}

    decoded = decode_chart_spec(payload)
    assert decoded.chart_id == "snap"
    assert serialize_chart(decoded) == serialize_chart(spec)


def test_encoded_options_are_plain_json_values() -> None:
    """Store colors as CSS strings and tuples as lists."""

    spec = build_chart("bar", [1, 2], ["a", "b"], "borderColor", "#ABC", "borderWidth", 2)
    encoded = encode_chart_spec(spec)
    assert encoded["options"] == {"borderColor": "#aabbcc", "borderWidth": 2}
    assert encoded["kind"] == "bar"
    assert encoded["chart_id"] == "barChart"


@pytest.mark.parametrize(
    ("overrides", "match"),
    [
        ({"kind": "scatter"}, "unsupported chart kind"),
        ({"kind": None}, "unsupported chart kind"),
        ({"series": []}, "at least one series"),
        ({"series": "1,2"}, "at least one series"),
        ({"series": [[1, 2], [3]]}, "equal length"),
        ({"series": [[1, 2], 3]}, "equal length"),
        ({"series": [["x", 2]]}, "only numbers or null"),
        ({"options": {"fill": {"above": "red"}}}, "requires a target"),
        ({"options": {"bogus": 1}}, "unrecognized option"),
        ({"labels": ["a"]}, "do not match sample size"),
    ],
)
def test_malformed_payloads_raise_invalid_argument(overrides: dict[str, object], match: str) -> None:
    """Reject payloads that cannot be rebuilt into a valid chart."""

    with pytest.raises(InvalidArgument, match=match):
        decode_chart_spec(_payload(**overrides))


def test_missing_chart_id_falls_back_to_default() -> None:
    """Use the kind's default id when the payload has none."""

    decoded = decode_chart_spec(_payload(chart_id=None, kind="radar"))
    assert decoded.chart_id == "radarChart"


def test_non_finite_numbers_survive_strict_json() -> None:
    """Store infinities and NaN labels in a form strict JSON accepts."""

    spec = line_chart([np.inf, -np.inf, np.nan, 2.5], [1, np.inf, np.nan, 4])
    encoded = encode_chart_spec(spec)
    assert encoded["series"] == [["Infinity", "-Infinity", None, 2.5]]
    assert encoded["labels"] == [1, "Infinity", None, 4]

    payload = json.loads(json.dumps(encoded, allow_nan=False))
    decoded = decode_chart_spec(payload)
    assert decoded.series[0].values == spec.series[0].values
    assert serialize_chart(decoded) == serialize_chart(spec)


def test_text_labels_named_like_infinity_stay_text() -> None:
    spec = line_chart([1, 2], ["Infinity", "b"])
    decoded = decode_chart_spec(json.loads(json.dumps(encode_chart_spec(spec))))
    assert decoded.labels == ("Infinity", "b")
