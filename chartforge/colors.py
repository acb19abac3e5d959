"""Color normalization for chart options.

Color options accept several input shapes (CSS names, hex strings, numeric
RGB/RGBA sequences, ``rgb()``/``rgba()`` strings). They are resolved here into a
single canonical `Color` before being stored, so serialization only ever
handles one representation.

Numeric components follow one fixed scale: red, green and blue are in
``[0, 255]`` and alpha is in ``[0, 1]``. Unit-scaled RGB (``[0, 1]`` floats) is
not inferred; ``(1, 0, 0)`` is a near-black color, not red.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Literal

import numpy as np

from .errors import InvalidColor
from .jsliteral import js_number, js_string

ColorSpace = Literal["named", "hex", "rgba"]

CSS_COLOR_NAMES: frozenset[str] = frozenset(
    {
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige", "bisque", "black",
        "blanchedalmond", "blue", "blueviolet", "brown", "burlywood", "cadetblue", "chartreuse",
        "chocolate", "coral", "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki", "darkmagenta",
        "darkolivegreen", "darkorange", "darkorchid", "darkred", "darksalmon", "darkseagreen",
        "darkslateblue", "darkslategray", "darkslategrey", "darkturquoise", "darkviolet", "deeppink",
        "deepskyblue", "dimgray", "dimgrey", "dodgerblue", "firebrick", "floralwhite", "forestgreen",
        "fuchsia", "gainsboro", "ghostwhite", "gold", "goldenrod", "gray", "green", "greenyellow",
        "grey", "honeydew", "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
        "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral", "lightcyan",
        "lightgoldenrodyellow", "lightgray", "lightgreen", "lightgrey", "lightpink", "lightsalmon",
        "lightseagreen", "lightskyblue", "lightslategray", "lightslategrey", "lightsteelblue",
        "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon", "mediumaquamarine",
        "mediumblue", "mediumorchid", "mediumpurple", "mediumseagreen", "mediumslateblue",
        "mediumspringgreen", "mediumturquoise", "mediumvioletred", "midnightblue", "mintcream",
        "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive", "olivedrab", "orange",
        "orangered", "orchid", "palegoldenrod", "palegreen", "paleturquoise", "palevioletred",
        "papayawhip", "peachpuff", "peru", "pink", "plum", "powderblue", "purple", "rebeccapurple",
        "red", "rosybrown", "royalblue", "saddlebrown", "salmon", "sandybrown", "seagreen", "seashell",
        "sienna", "silver", "skyblue", "slateblue", "slategray", "slategrey", "snow", "springgreen",
        "steelblue", "tan", "teal", "thistle", "tomato", "transparent", "turquoise", "violet", "wheat",
        "white", "whitesmoke", "yellow", "yellowgreen",
    }
)

_HEX_RE = re.compile(r"^#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_NUMBER = r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)\s*"
_RGB_FUNC_RE = re.compile(rf"^rgba?\({_NUMBER},{_NUMBER},{_NUMBER}(?:,{_NUMBER})?\)$")


@dataclass(frozen=True, slots=True)
class Color:
    """A canonical color value.

    Args:
        space: Representation family of `value`.
        value: Lowercase CSS name, lowercase long-form hex string, or an
            ``(r, g, b, a)`` tuple.
    """

    space: ColorSpace
    value: str | tuple[float, float, float, float]

    def css(self) -> str:
        """Return the CSS color string understood by Chart.js."""

        if self.space == "rgba":
            return "rgba(" + ", ".join(js_number(c) for c in self.value) + ")"
        return str(self.value)

    def to_js(self) -> str:
        """Return the color as a quoted script literal."""

        return js_string(self.css())


def normalize_color(raw: object) -> Color:
    """Resolve a single color specification into a canonical `Color`.

    Args:
        raw: A `Color`, a CSS color name, a hex string, an ``rgb()``/``rgba()``
            string, or a numeric sequence of 3 or 4 components.

    Returns:
        Canonical Color.

    Raises:
        InvalidColor: When the specification is not understood or a component
            is out of range.
    """

    if isinstance(raw, Color):
        return raw
    if isinstance(raw, str):
        return _color_from_string(raw)
    if isinstance(raw, (bool, np.bool_)) or raw is None:
        raise InvalidColor(raw, reason="unsupported color specification")
    if isinstance(raw, (list, tuple, np.ndarray)):
        return _color_from_components(raw, raw)
    raise InvalidColor(raw, reason="unsupported color specification")


def normalize_color_spec(raw: object) -> Color | tuple[Color, ...]:
    """Resolve one color or a per-point list of colors.

    A flat numeric sequence is a single color. A sequence of strings, colors,
    or numeric rows is a list of colors (one per data point).

    Raises:
        InvalidColor: When any entry is not a valid color.
    """

    if isinstance(raw, (Color, str)):
        return normalize_color(raw)
    if isinstance(raw, np.ndarray):
        if raw.ndim == 2:
            return _color_list([row for row in raw], raw)
        return normalize_color(raw)
    if isinstance(raw, (list, tuple)):
        if raw and all(_is_real(item) for item in raw):
            return normalize_color(raw)
        return _color_list(list(raw), raw)
    return normalize_color(raw)


def _color_list(items: list[object], raw: object) -> tuple[Color, ...]:
    """Normalize every entry of a per-point color list."""

    if not items:
        raise InvalidColor(raw, reason="empty color list")
    return tuple(normalize_color(item) for item in items)


def _color_from_string(raw: str) -> Color:
    """Parse a CSS name, hex string, or ``rgb()``/``rgba()`` string."""

    text = raw.strip().lower()
    if text.startswith("#"):
        if not _HEX_RE.match(text):
            raise InvalidColor(raw, reason="hex colors must be #RGB, #RGBA, #RRGGBB or #RRGGBBAA")
        digits = text[1:]
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        return Color(space="hex", value=f"#{digits}")
    match = _RGB_FUNC_RE.match(text.replace(" ", ""))
    if match:
        components = [float(group) for group in match.groups() if group is not None]
        return _color_from_components(components, raw)
    if text in CSS_COLOR_NAMES:
        return Color(space="named", value=text)
    raise InvalidColor(raw, reason="unknown color name")


def _color_from_components(components: object, raw: object) -> Color:
    """Build an RGBA color from 3 or 4 numeric components."""

    try:
        values = np.asarray(components)
    except ValueError as exc:
        raise InvalidColor(raw, reason="color components must be numeric") from exc
    if values.ndim != 1 or values.dtype.kind not in "iuf":
        raise InvalidColor(raw, reason="color components must be a flat numeric sequence")
    if values.size not in (3, 4):
        raise InvalidColor(raw, reason="expected 3 (RGB) or 4 (RGBA) components")
    numbers = [float(v) for v in values]
    if not all(math.isfinite(v) for v in numbers):
        raise InvalidColor(raw, reason="color components must be finite")
    if any(v < 0 or v > 255 for v in numbers[:3]):
        raise InvalidColor(raw, reason="RGB components must be in [0, 255]")
    alpha = numbers[3] if len(numbers) == 4 else 1.0
    if alpha < 0 or alpha > 1:
        raise InvalidColor(raw, reason="alpha must be in [0, 1]")
    r, g, b = (_compact(v) for v in numbers[:3])
    return Color(space="rgba", value=(r, g, b, _compact(alpha)))


def _compact(value: float) -> int | float:
    """Return integral floats as ints so they print without a fraction."""

    return int(value) if value.is_integer() else value


def _is_real(value: object) -> bool:
    return isinstance(value, (Real, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))
