"""Tests for Chart.js configuration serialization."""

from __future__ import annotations

from types import MappingProxyType

import numpy as np
import pytest

from chartforge.builder import build_chart, doughnut_chart, line_chart
from chartforge.schema import ChartSpec, make_fill
from chartforge.serializer import serialize_chart

pytestmark = pytest.mark.unit


def _mask_strings(text: str) -> str:
    """Replace each single-quoted string with a placeholder so bracket checks ignore label text."""

    out: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "'":
                in_string = False
            continue
        if ch == "'":
            in_string = True
            out.append("0")
            continue
        out.append(ch)
    return "".join(out)


def _assert_well_formed(text: str) -> None:
    """Every bracket is closed in order and no separator dangles."""

    body = _mask_strings(text)
    pairs = {")": "(", "]": "[", "}": "{"}
    stack: list[str] = []
    for ch in body:
        if ch in "([{":
            stack.append(ch)
        elif ch in pairs:
            assert stack and stack.pop() == pairs[ch], text
    assert not stack, text
    compact = "".join(body.split())
    for dangling in (",]", ",}", "[,", "{,", ",,"):
        assert dangling not in compact, text


def test_string_labels_scenario() -> None:
    """Serialize a single-series line chart exactly."""

    spec = line_chart([1, 2, 3], ["a", "b", "c"])
    assert serialize_chart(spec) == (
        "{\n"
        "  type: 'line',\n"
        "  data: {\n"
        "    labels: ['a', 'b', 'c'],\n"
        "    datasets: [{ data: [1, 2, 3] }]\n"
        "  },\n"
        "  options: {}\n"
        "}"
    )


def test_numeric_labels_scenario() -> None:
    """Render numeric labels with %g formatting and one dataset per column."""

    text = serialize_chart(line_chart([[1, 2], [3, 4]], [10, 20]))
    assert "    labels: [10, 20],\n" in text
    assert "    datasets: [{ data: [1, 3] }, { data: [2, 4] }]\n" in text


def test_top_level_members_are_ordered() -> None:
    """Emit type, data and options in that order."""

    text = serialize_chart(doughnut_chart([1, 2], ["a", "b"]))
    assert text.index("type: 'doughnut'") < text.index("data: {") < text.index("options: {}")


@pytest.mark.parametrize(("rows", "cols"), [(1, 1), (2, 1), (2, 2), (2, 4), (7, 1), (7, 3)])
def test_output_is_well_formed_for_any_shape(rows: int, cols: int) -> None:
    """Stay bracket-balanced with no dangling separators for any label/series count."""

    data = np.arange(rows * cols, dtype=float).reshape(rows, cols)
    for labels in ([f"L{idx}" for idx in range(rows)], list(range(rows))):
        text = serialize_chart(build_chart("line", data, labels, "borderDash", [], "borderColor", ["red"] * rows))
        _assert_well_formed(text)
        assert text.count("{ data: [") == cols


def test_zero_series_serializes_an_empty_dataset_array() -> None:
    """Close the dataset array even with no series."""

    spec = ChartSpec(kind="line", labels=("a",), series=(), options=MappingProxyType({}), chart_id="empty")
    text = serialize_chart(spec)
    assert "    datasets: []\n" in text
    _assert_well_formed(text)


def test_serialization_is_deterministic() -> None:
    """Equivalent inputs give byte-identical output."""

    first = line_chart([[1, 2], [3, 4]], ["a", "b"], "borderColor", "red", "tension", 0.3)
    second = line_chart([[1, 2], [3, 4]], ["a", "b"], "borderColor", "red", "tension", 0.3)
    assert serialize_chart(first) == serialize_chart(first)
    assert serialize_chart(first) == serialize_chart(second)


def test_dataset_options_are_written_inside_each_dataset() -> None:
    """Write validated dataset options after the data array."""

    spec = line_chart(
        [1, 2],
        ["a", "b"],
        "borderColor",
        "Red",
        "borderDash",
        [5, 5],
        "fill",
        make_fill("origin", above="blue"),
        "showLine",
        False,
        "backgroundColor",
        [255, 0, 0, 0.5],
    )
    text = serialize_chart(spec)
    assert (
        "datasets: [{ data: [1, 2], borderColor: 'red', borderDash: [5, 5], "
        "fill: { target: 'origin', above: 'blue' }, showLine: false, "
        "backgroundColor: 'rgba(255, 0, 0, 0.5)' }]"
    ) in text
    assert "  options: {}\n" in text


def test_chart_options_fill_the_options_block() -> None:
    """Emit chart-scoped options in supplied order."""

    text = serialize_chart(doughnut_chart([1, 2], ["a", "b"], "cutout", 50, "responsive", False))
    assert text.endswith("  options: { cutout: 50, responsive: false }\n}")
    assert "cutout" not in text.split("options:")[0]


def test_per_point_colors_and_simple_fill() -> None:
    """Render color lists as arrays and bare fill targets as plain values."""

    text = serialize_chart(
        build_chart("radar", [1, 2], ["a", "b"], "backgroundColor", ["#FF0000", "blue"], "fill", make_fill(True))
    )
    assert "backgroundColor: ['#ff0000', 'blue']" in text
    assert "fill: true" in text


def test_labels_are_escaped() -> None:
    """Escape quotes, backslashes and script terminators inside labels."""

    text = serialize_chart(line_chart([1, 2, 3], ["it's", "a\\b", "</script>"]))
    assert "labels: ['it\\'s', 'a\\\\b', '<\\/script>']" in text


def test_number_formatting() -> None:
    """Use %g for numeric labels, exact values for data, and null for NaN."""

    text = serialize_chart(line_chart([0.5, 1234567.0, np.nan], [0.25, 1e-7, 3]))
    assert "labels: [0.25, 1e-07, 3]" in text
    assert "data: [0.5, 1234567, null]" in text


def test_data_values_keep_full_precision() -> None:
    """Write dataset values without rounding them to six significant digits."""

    text = serialize_chart(line_chart([1234567, 0.1234567891, -2.5e-12], ["a", "b", "c"]))
    assert "datasets: [{ data: [1234567, 0.1234567891, -2.5e-12] }]" in text


def test_kind_string_for_polar_area() -> None:
    """Emit the Chart.js spelling of the chart type."""

    text = serialize_chart(build_chart("polarArea", [1], "a"))
    assert text.startswith("{\n  type: 'polarArea',\n")
