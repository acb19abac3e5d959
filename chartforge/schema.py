"""Schema types for declarative chart configuration.

A chart is described by an immutable `ChartSpec`: its kind, labels, one
`SeriesSpec` per data column, and the validated option values. The builder is
the only producer of these objects; the serializer and document wrapper only
read them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from .colors import Color, normalize_color
from .errors import InvalidArgument
from .jsliteral import js_array, js_key, js_literal, js_object

ChartKind = Literal["line", "doughnut", "bar", "pie", "polarArea", "radar"]

OptionKindTag = Literal[
    "scalar",
    "boolean",
    "vector",
    "string_enum",
    "bool_or_string_enum",
    "object",
    "color",
    "text",
]

OptionScope = Literal["dataset", "chart"]

FillTarget = bool | int | str

FILL_TARGETS: tuple[str, ...] = ("origin", "start", "end", "stack", "shape")


@dataclass(frozen=True, slots=True)
class OptionKind:
    """Describe how a raw option value is validated.

    Args:
        tag: Validation family.
        allowed: Allowed strings for the enum families. ``None`` on
            ``bool_or_string_enum`` accepts any string.
        object_type: Required class for the ``object`` family.
    """

    tag: OptionKindTag
    allowed: tuple[str, ...] | None = None
    object_type: type | None = None

    def describe(self) -> str:
        """Return a short description used in error messages."""

        if self.tag == "object" and self.object_type is not None:
            return f"a {self.object_type.__name__} instance"
        if self.tag == "string_enum":
            return "a string"
        if self.tag == "bool_or_string_enum":
            return "a boolean or a string"
        return {
            "scalar": "a finite numeric scalar",
            "boolean": "a boolean",
            "vector": "a numeric vector",
            "color": "a color",
            "text": "a string",
        }.get(self.tag, self.tag)


SCALAR = OptionKind("scalar")
BOOLEAN = OptionKind("boolean")
VECTOR = OptionKind("vector")
COLOR = OptionKind("color")
TEXT = OptionKind("text")


def string_enum(*allowed: str) -> OptionKind:
    """Return a kind accepting one of `allowed` (case-insensitive)."""

    return OptionKind("string_enum", allowed=tuple(allowed))


def bool_or_string_enum(*allowed: str) -> OptionKind:
    """Return a kind accepting a boolean or one of `allowed` (any string when empty)."""

    return OptionKind("bool_or_string_enum", allowed=tuple(allowed) or None)


def object_of(object_type: type) -> OptionKind:
    """Return a kind accepting instances of `object_type`."""

    return OptionKind("object", object_type=object_type)


@dataclass(frozen=True, slots=True)
class Fill:
    """Area fill settings for line and radar datasets.

    Args:
        target: ``True``/``False``, an absolute dataset index, a relative index
            string such as ``"-1"``, or one of `FILL_TARGETS`.
        above: Optional color used above the target.
        below: Optional color used below the target.
    """

    target: FillTarget
    above: Color | None = None
    below: Color | None = None

    def to_js(self) -> str:
        """Return the fill setting as a script literal."""

        if self.above is None and self.below is None:
            return js_literal(self.target)
        members: dict[str, object] = {"target": self.target}
        if self.above is not None:
            members["above"] = self.above
        if self.below is not None:
            members["below"] = self.below
        return js_object(members)


def make_fill(target: FillTarget, *, above: object = None, below: object = None) -> Fill:
    """Build a validated `Fill`.

    Args:
        target: Fill target (see `Fill`).
        above: Optional color specification for the area above the target.
        below: Optional color specification for the area below the target.

    Returns:
        Fill with normalized colors.

    Raises:
        InvalidArgument: When `target` is not a supported fill target.
        InvalidColor: When `above` or `below` is not a valid color.
    """

    if isinstance(target, str):
        normalized = target.strip().lower()
        relative = normalized[1:] if normalized[:1] in ("+", "-") else ""
        if normalized not in FILL_TARGETS and not (relative.isdigit() and relative):
            raise InvalidArgument(
                f"Fill target must be a boolean, a dataset index, a relative index like '-1', "
                f"or one of {list(FILL_TARGETS)}; got {target!r}."
            )
        target = normalized
    elif not isinstance(target, (bool, int)):
        raise InvalidArgument(f"Fill target must be a boolean, int, or string; got {target!r}.")
    elif not isinstance(target, bool) and target < 0:
        raise InvalidArgument(f"Fill target dataset index must be >= 0; got {target!r}.")
    return Fill(
        target=target,
        above=normalize_color(above) if above is not None else None,
        below=normalize_color(below) if below is not None else None,
    )


def _frozen_mapping(items: Mapping[str, object] | None = None) -> Mapping[str, object]:
    return MappingProxyType(dict(items or {}))


@dataclass(frozen=True, slots=True)
class SeriesSpec:
    """One dataset: a column of values plus its dataset-scoped style options.

    Args:
        values: Column values aligned to the chart labels; NaN is stored as None.
        overrides: Validated dataset options in application order.
    """

    values: tuple[float | None, ...]
    overrides: Mapping[str, object] = field(default_factory=_frozen_mapping)

    @classmethod
    def from_column(cls, column: Iterable[float], overrides: Mapping[str, object] | None = None) -> SeriesSpec:
        """Build a series from a numeric column."""

        values = tuple(None if value != value else _plain_number(value) for value in column)
        return cls(values=values, overrides=_frozen_mapping(overrides))

    def serialize(self) -> str:
        """Return the Chart.js dataset object literal for this series."""

        members = [f"data: {js_array(self.values)}"]
        members.extend(f"{js_key(name)}: {js_literal(value)}" for name, value in self.overrides.items())
        return "{ " + ", ".join(members) + " }"


@dataclass(frozen=True, slots=True)
class ChartSpec:
    """A validated chart configuration ready for serialization.

    Args:
        kind: Chart.js chart type.
        labels: Category labels, all strings or all numbers.
        series: One SeriesSpec per data column, each with ``len(labels)`` values.
        options: Every validated option keyed by its target property name.
        chart_id: Canvas identifier used when embedding the chart.
    """

    kind: ChartKind
    labels: tuple[str, ...] | tuple[float, ...]
    series: tuple[SeriesSpec, ...]
    options: Mapping[str, object]
    chart_id: str

    @property
    def rows(self) -> int:
        """Number of data points per series."""

        return len(self.labels)


def _plain_number(value: object) -> int | float:
    """Convert numpy scalars to Python numbers, keeping ints as ints."""

    item = getattr(value, "item", None)
    number = item() if callable(item) else value
    if isinstance(number, bool):
        return int(number)
    return number
