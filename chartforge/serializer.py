"""Serialize a ChartSpec into a Chart.js configuration literal.

The output is a script literal, not JSON:

    {
      type: 'line',
      data: {
        labels: ['a', 'b', 'c'],
        datasets: [{ data: [1, 2, 3] }]
      },
      options: {}
    }

Numeric labels use ``%g`` formatting; data values are written exactly.
Dataset-scoped options are written inside each dataset (where Chart.js reads
them); chart-scoped options fill the ``options`` block.
"""

from __future__ import annotations

from .jsliteral import js_general_number, js_object, js_string
from .options import option_table
from .schema import ChartSpec


def serialize_chart(spec: ChartSpec) -> str:
    """Return the Chart.js configuration for `spec`.

    The result is deterministic: equal specs always produce identical text.

    Args:
        spec: Chart to serialize.

    Returns:
        Configuration object literal suitable for ``new Chart(id, config)``.
    """

    chart_names = option_table(spec.kind).names(scope="chart")
    chart_options = {name: value for name, value in spec.options.items() if name in chart_names}
    datasets = ", ".join(series.serialize() for series in spec.series)
    lines = [
        "{",
        f"  type: {js_string(spec.kind)},",
        "  data: {",
        f"    labels: {_labels_literal(spec.labels)},",
        f"    datasets: [{datasets}]",
        "  },",
        f"  options: {js_object(chart_options)}",
        "}",
    ]
    return "\n".join(lines)


def _labels_literal(labels: tuple[str, ...] | tuple[float, ...]) -> str:
    parts = (js_string(label) if isinstance(label, str) else js_general_number(label) for label in labels)
    return "[" + ", ".join(parts) + "]"
