"""Option dispatch tables for each chart kind.

Every chart kind has one `OptionTable` that maps a case-insensitive option
name to the property it sets, the kind its value must satisfy, and whether the
property belongs to each dataset or to the chart-level ``options`` block. The
builder walks caller-supplied name/value pairs through these tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable

from .schema import (
    BOOLEAN,
    COLOR,
    SCALAR,
    TEXT,
    VECTOR,
    ChartKind,
    Fill,
    OptionKind,
    OptionScope,
    bool_or_string_enum,
    object_of,
    string_enum,
)

CAP_STYLES = string_enum("butt", "round", "square")
JOIN_STYLES = string_enum("bevel", "round", "miter")
BORDER_ALIGN = string_enum("center", "inner")
INDEX_AXIS = string_enum("x", "y")
INTERPOLATION_MODES = string_enum("default", "monotone")
STEPPED = bool_or_string_enum("before", "after", "middle")
STACK = bool_or_string_enum()
BORDER_SKIPPED = bool_or_string_enum("start", "end", "middle", "bottom", "left", "top", "right")
POINT_STYLE = bool_or_string_enum(
    "circle",
    "cross",
    "crossRot",
    "dash",
    "line",
    "rect",
    "rectRounded",
    "rectRot",
    "star",
    "triangle",
)
FILL = object_of(Fill)


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Describe a recognized option.

    Args:
        name: Target property name as Chart.js spells it (e.g. ``borderWidth``).
        kind: Validation kind for the value.
        scope: ``dataset`` options are copied into every series; ``chart``
            options are emitted in the chart-level ``options`` block.
    """

    name: str
    kind: OptionKind
    scope: OptionScope = "dataset"

    @property
    def key(self) -> str:
        """Case-folded lookup key."""

        return self.name.casefold()


class OptionTable:
    """Case-insensitive lookup of the options one chart kind accepts."""

    def __init__(self, kind: ChartKind, specs: Iterable[OptionSpec]) -> None:
        """Initialize a table from a collection of option specs."""

        self.kind = kind
        self._specs: dict[str, OptionSpec] = {}
        for spec in specs:
            if spec.key in self._specs:
                raise ValueError(f"Duplicate OptionSpec for {kind!r}: {spec.name!r}")
            self._specs[spec.key] = spec

    def get(self, name: str) -> OptionSpec | None:
        """Return the spec for an option name (any casing), or None when unknown."""

        return self._specs.get(name.casefold())

    def list(self) -> tuple[OptionSpec, ...]:
        """Return all specs in a stable order."""

        return tuple(self._specs[key] for key in sorted(self._specs.keys()))

    def names(self, *, scope: OptionScope | None = None) -> frozenset[str]:
        """Return target property names, optionally limited to one scope."""

        return frozenset(spec.name for spec in self._specs.values() if scope is None or spec.scope == scope)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._specs


def _specs(kind: OptionKind, *names: str, scope: OptionScope = "dataset") -> tuple[OptionSpec, ...]:
    return tuple(OptionSpec(name=name, kind=kind, scope=scope) for name in names)


_CHART_LEVEL: Final = (
    *_specs(BOOLEAN, "responsive", "maintainAspectRatio", scope="chart"),
    *_specs(SCALAR, "aspectRatio", "devicePixelRatio", scope="chart"),
    *_specs(TEXT, "locale", scope="chart"),
)

_ARC_OPTIONS: Final = (
    *_specs(COLOR, "backgroundColor", "borderColor", "hoverBackgroundColor", "hoverBorderColor"),
    *_specs(BORDER_ALIGN, "borderAlign"),
    *_specs(VECTOR, "borderDash", "hoverBorderDash"),
    *_specs(JOIN_STYLES, "borderJoinStyle", "hoverBorderJoinStyle"),
    *_specs(SCALAR, "borderDashOffset", "borderWidth", "clip", "hoverBorderDashOffset", "hoverBorderWidth"),
    *_specs(TEXT, "label"),
)

LINE_OPTIONS: Final = OptionTable(
    "line",
    (
        *_specs(
            COLOR,
            "backgroundColor",
            "borderColor",
            "hoverBackgroundColor",
            "hoverBorderColor",
            "pointBackgroundColor",
            "pointBorderColor",
            "pointHoverBackgroundColor",
            "pointHoverBorderColor",
        ),
        *_specs(CAP_STYLES, "borderCapStyle", "hoverBorderCapStyle"),
        *_specs(JOIN_STYLES, "borderJoinStyle", "hoverBorderJoinStyle"),
        *_specs(VECTOR, "borderDash", "hoverBorderDash"),
        *_specs(
            SCALAR,
            "borderDashOffset",
            "borderWidth",
            "clip",
            "hoverBorderDashOffset",
            "hoverBorderWidth",
            "order",
            "pointBorderWidth",
            "pointHitRadius",
            "pointHoverBorderWidth",
            "pointHoverRadius",
            "pointRadius",
            "pointRotation",
            "tension",
        ),
        *_specs(INTERPOLATION_MODES, "cubicInterpolationMode"),
        *_specs(BOOLEAN, "drawActiveElementsOnTop", "showLine", "spanGaps"),
        *_specs(FILL, "fill"),
        *_specs(INDEX_AXIS, "indexAxis"),
        *_specs(TEXT, "label"),
        *_specs(POINT_STYLE, "pointStyle"),
        *_specs(STACK, "stack"),
        *_specs(STEPPED, "stepped"),
        *_CHART_LEVEL,
    ),
)

DOUGHNUT_OPTIONS: Final = OptionTable(
    "doughnut",
    (
        *_ARC_OPTIONS,
        *_specs(SCALAR, "borderRadius", "circumference", "hoverOffset", "offset", "rotation", "spacing", "weight"),
        *_specs(SCALAR, "cutout", "radius", scope="chart"),
        *_CHART_LEVEL,
    ),
)

PIE_OPTIONS: Final = OptionTable("pie", DOUGHNUT_OPTIONS.list())

BAR_OPTIONS: Final = OptionTable(
    "bar",
    (
        *_specs(COLOR, "backgroundColor", "borderColor", "hoverBackgroundColor", "hoverBorderColor"),
        *_specs(
            SCALAR,
            "base",
            "barPercentage",
            "barThickness",
            "borderRadius",
            "borderWidth",
            "categoryPercentage",
            "clip",
            "hoverBorderRadius",
            "hoverBorderWidth",
            "inflateAmount",
            "maxBarThickness",
            "minBarLength",
            "order",
        ),
        *_specs(BORDER_SKIPPED, "borderSkipped"),
        *_specs(BOOLEAN, "grouped", "skipNull"),
        *_specs(INDEX_AXIS, "indexAxis"),
        *_specs(TEXT, "label"),
        *_specs(POINT_STYLE, "pointStyle"),
        *_specs(STACK, "stack"),
        *_CHART_LEVEL,
    ),
)

POLAR_AREA_OPTIONS: Final = OptionTable(
    "polarArea",
    (
        *_ARC_OPTIONS,
        *_specs(BOOLEAN, "circular"),
        *_CHART_LEVEL,
    ),
)

RADAR_OPTIONS: Final = OptionTable(
    "radar",
    (
        *_specs(
            COLOR,
            "backgroundColor",
            "borderColor",
            "hoverBackgroundColor",
            "hoverBorderColor",
            "pointBackgroundColor",
            "pointBorderColor",
            "pointHoverBackgroundColor",
            "pointHoverBorderColor",
        ),
        *_specs(CAP_STYLES, "borderCapStyle", "hoverBorderCapStyle"),
        *_specs(JOIN_STYLES, "borderJoinStyle", "hoverBorderJoinStyle"),
        *_specs(VECTOR, "borderDash", "hoverBorderDash"),
        *_specs(
            SCALAR,
            "borderDashOffset",
            "borderWidth",
            "hoverBorderDashOffset",
            "hoverBorderWidth",
            "order",
            "pointBorderWidth",
            "pointHitRadius",
            "pointHoverBorderWidth",
            "pointHoverRadius",
            "pointRadius",
            "pointRotation",
            "tension",
        ),
        *_specs(FILL, "fill"),
        *_specs(TEXT, "label"),
        *_specs(POINT_STYLE, "pointStyle"),
        *_specs(BOOLEAN, "spanGaps"),
        *_CHART_LEVEL,
    ),
)

OPTION_TABLES: Final[dict[str, OptionTable]] = {
    table.kind: table
    for table in (LINE_OPTIONS, DOUGHNUT_OPTIONS, PIE_OPTIONS, BAR_OPTIONS, POLAR_AREA_OPTIONS, RADAR_OPTIONS)
}


def option_table(kind: str) -> OptionTable:
    """Return the dispatch table for a chart kind.

    Raises:
        KeyError: When the chart kind is unknown.
    """

    return OPTION_TABLES[kind]
