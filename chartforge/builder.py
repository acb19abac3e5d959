"""Chart builder: validate data and labels, build series, apply options.

`build_chart` is the single construction path for every chart kind. It
validates the data matrix and labels, creates one `SeriesSpec` per data
column, routes name/value option pairs through the kind's `OptionTable`, and
returns an immutable `ChartSpec`. Nothing is returned when any step fails.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType

import numpy as np

from . import settings
from .errors import InvalidArgument
from .options import OptionTable, option_table
from .presets import flatten_pairs
from .schema import ChartKind, ChartSpec, SeriesSpec
from .validator import validate_option

LOGGER = logging.getLogger(__name__)

CHART_NAMES: dict[str, str] = {
    "line": "LineChart",
    "doughnut": "DoughnutChart",
    "bar": "BarChart",
    "pie": "PieChart",
    "polarArea": "PolarAreaChart",
    "radar": "RadarChart",
}

DEFAULT_CHART_IDS: dict[str, str] = {kind: f"{kind}Chart" for kind in CHART_NAMES}

CHART_ID_OPTION = "chartid"


def build_chart(kind: ChartKind, *args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a validated chart configuration.

    Args:
        kind: Chart.js chart type (``line``, ``doughnut``, ``bar``, ``pie``,
            ``polarArea`` or ``radar``).
        *args: ``data, labels`` followed by flat option name/value pairs, e.g.
            ``build_chart("line", data, labels, "BorderWidth", 2)``.
        strict: Reject unrecognized option names. Defaults to
            ``settings.STRICT_OPTIONS``.
        **named: Additional options, applied after the positional pairs.

    Returns:
        ChartSpec with one series per data column.

    Raises:
        InvalidArgument: For malformed data, labels, option pairs or chart id.
        InvalidOptionType: When an option value has the wrong kind.
        InvalidOptionValue: When a string option is not an allowed value.
        InvalidColor: When a color option cannot be normalized.
    """

    table = _table_for(kind)
    chart_name = CHART_NAMES[kind]
    if len(args) < 2:
        raise InvalidArgument(f"{chart_name}: too few input arguments.")

    data, labels, *items = args
    matrix = _data_matrix(data, chart_name=chart_name)
    label_values = _labels(labels, chart_name=chart_name)
    if len(label_values) != matrix.shape[0]:
        raise InvalidArgument(f"{chart_name}: LABELS do not match sample size in DATA.")

    pairs = _option_pairs([*items, *flatten_pairs(named.items())], chart_name=chart_name)
    options, chart_id = _apply_options(table, pairs, chart_name=chart_name, strict=strict)

    spec = _assemble(
        table,
        labels=label_values,
        columns=[matrix[:, idx] for idx in range(matrix.shape[1])],
        options=options,
        chart_id=chart_id or DEFAULT_CHART_IDS[kind],
    )
    LOGGER.debug("Built %s %r with %d series and %d options.", chart_name, spec.chart_id, len(spec.series), len(options))
    return spec


def with_options(spec: ChartSpec, *items: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Return a copy of `spec` with more options applied.

    Options go through the same dispatch and validation as `build_chart`; the
    source spec is left untouched.

    Raises:
        InvalidArgument: For unpaired items, unknown names in strict mode, or a
            bad chart id.
        InvalidOptionType: When an option value has the wrong kind.
        InvalidOptionValue: When a string option is not an allowed value.
        InvalidColor: When a color option cannot be normalized.
    """

    table = _table_for(spec.kind)
    chart_name = CHART_NAMES[spec.kind]
    pairs = _option_pairs([*items, *flatten_pairs(named.items())], chart_name=chart_name)
    updates, chart_id = _apply_options(table, pairs, chart_name=chart_name, strict=strict)
    options = dict(spec.options)
    options.update(updates)
    return _assemble(
        table,
        labels=spec.labels,
        columns=[series.values for series in spec.series],
        options=options,
        chart_id=chart_id or spec.chart_id,
    )


def line_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``line`` chart. See `build_chart`."""

    return build_chart("line", *args, strict=strict, **named)


def doughnut_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``doughnut`` chart. See `build_chart`."""

    return build_chart("doughnut", *args, strict=strict, **named)


def pie_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``pie`` chart. See `build_chart`."""

    return build_chart("pie", *args, strict=strict, **named)


def bar_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``bar`` chart. See `build_chart`."""

    return build_chart("bar", *args, strict=strict, **named)


def polar_area_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``polarArea`` chart. See `build_chart`."""

    return build_chart("polarArea", *args, strict=strict, **named)


def radar_chart(*args: object, strict: bool | None = None, **named: object) -> ChartSpec:
    """Build a ``radar`` chart. See `build_chart`."""

    return build_chart("radar", *args, strict=strict, **named)


def _table_for(kind: str) -> OptionTable:
    if kind not in CHART_NAMES:
        raise InvalidArgument(f"Unsupported chart kind: {kind!r}.")
    return option_table(kind)


def _data_matrix(data: object, *, chart_name: str) -> np.ndarray:
    """Return `data` as a 2-D numeric array with one column per series.

    A scalar is a 1x1 matrix. Any vector, including a 1xN row, is a single
    column.
    """

    not_numeric = InvalidArgument(f"{chart_name}: DATA must be a numeric matrix.")
    if data is None or isinstance(data, (str, bytes)):
        raise not_numeric
    try:
        matrix = np.asarray(data)
    except (TypeError, ValueError) as exc:
        raise not_numeric from exc
    if matrix.dtype.kind not in "iuf" or matrix.ndim > 2:
        raise not_numeric
    if matrix.size == 0:
        raise InvalidArgument(f"{chart_name}: DATA cannot be empty.")
    if matrix.ndim < 2 or matrix.shape[0] == 1:
        matrix = matrix.reshape(-1, 1)
    return matrix


def _labels(labels: object, *, chart_name: str) -> tuple[str, ...] | tuple[float, ...]:
    """Return labels as a flat tuple of strings or of numbers.

    A single string is exactly one label.
    """

    wrong_type = InvalidArgument(f"{chart_name}: LABELS must be numeric, cellstring, or character vector.")
    if labels is None or (isinstance(labels, str) and not labels):
        raise InvalidArgument(f"{chart_name}: LABELS cannot be empty.")
    if isinstance(labels, str):
        return (labels,)
    if isinstance(labels, (bool, np.bool_)):
        raise wrong_type
    if isinstance(labels, (int, float, np.integer, np.floating)):
        return (labels.item() if isinstance(labels, np.generic) else labels,)
    if not isinstance(labels, (list, tuple, np.ndarray)):
        raise wrong_type

    try:
        array = np.asarray(labels, dtype=object)
    except ValueError as exc:
        raise InvalidArgument(f"{chart_name}: LABELS must be a vector.") from exc
    if array.size == 0:
        raise InvalidArgument(f"{chart_name}: LABELS cannot be empty.")
    if array.ndim > 2 or (array.ndim == 2 and min(array.shape) > 1):
        raise InvalidArgument(f"{chart_name}: LABELS must be a vector.")

    items = list(array.ravel())
    if all(isinstance(item, str) for item in items):
        return tuple(str(item) for item in items)
    if all(
        isinstance(item, (int, float, np.integer, np.floating)) and not isinstance(item, (bool, np.bool_))
        for item in items
    ):
        return tuple(item.item() if isinstance(item, np.generic) else item for item in items)
    raise wrong_type


def _option_pairs(items: Sequence[object], *, chart_name: str) -> list[tuple[str, object]]:
    """Group a flat name/value list into pairs."""

    if len(items) % 2 != 0:
        raise InvalidArgument(f"{chart_name}: optional arguments must be in Name,Value pairs.")
    pairs: list[tuple[str, object]] = []
    for idx in range(0, len(items), 2):
        name = items[idx]
        if not isinstance(name, str):
            raise InvalidArgument(f"{chart_name}: option names must be strings; got {name!r}.")
        pairs.append((name, items[idx + 1]))
    return pairs


def _apply_options(
    table: OptionTable,
    pairs: Iterable[tuple[str, object]],
    *,
    chart_name: str,
    strict: bool | None,
) -> tuple[dict[str, object], str | None]:
    """Validate option pairs in order against a dispatch table.

    Returns:
        Validated options keyed by target property name, and the requested
        chart id (None when not supplied).
    """

    if strict is None:
        strict = settings.STRICT_OPTIONS
    options: dict[str, object] = {}
    chart_id: str | None = None
    for name, value in pairs:
        if name.casefold() == CHART_ID_OPTION:
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgument(f"{chart_name}: 'ChartID' must be a character vector.")
            chart_id = value
            continue
        spec = table.get(name)
        if spec is None:
            if strict:
                raise InvalidArgument(f"{chart_name}: unrecognized option {name!r}.")
            LOGGER.debug("%s: ignoring unrecognized option %r.", chart_name, name)
            continue
        options[spec.name] = validate_option(value, spec.kind, spec.name)
    return options, chart_id


def _assemble(
    table: OptionTable,
    *,
    labels: tuple[str, ...] | tuple[float, ...],
    columns: Sequence[Iterable[float | None]],
    options: dict[str, object],
    chart_id: str,
) -> ChartSpec:
    dataset_names = table.names(scope="dataset")
    dataset_options = {name: value for name, value in options.items() if name in dataset_names}
    series = tuple(SeriesSpec.from_column(column, dataset_options) for column in columns)
    return ChartSpec(
        kind=table.kind,  # type: ignore[arg-type]
        labels=labels,
        series=series,
        options=MappingProxyType(dict(options)),
        chart_id=chart_id,
    )
