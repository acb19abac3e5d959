"""Build Chart.js configurations from numeric data.

Charts are constructed with `build_chart` (or a per-kind helper such as
`line_chart`), serialized with `serialize_chart`, and wrapped into a
standalone HTML document with `chart_html`, `save_chart_html`, or
`serve_chart`.
"""

from .builder import (
    bar_chart,
    build_chart,
    doughnut_chart,
    line_chart,
    pie_chart,
    polar_area_chart,
    radar_chart,
    with_options,
)
from .colors import Color, normalize_color, normalize_color_spec
from .document import ChartServer, chart_html, save_chart_html, serve_chart
from .errors import ChartError, InvalidArgument, InvalidColor, InvalidOptionType, InvalidOptionValue
from .presets import flatten_pairs, load_style_preset
from .schema import ChartSpec, Fill, SeriesSpec, make_fill
from .serializer import serialize_chart
from .snapshot_codec import decode_chart_spec, encode_chart_spec

__all__ = [
    "ChartError",
    "ChartServer",
    "ChartSpec",
    "Color",
    "Fill",
    "InvalidArgument",
    "InvalidColor",
    "InvalidOptionType",
    "InvalidOptionValue",
    "SeriesSpec",
    "bar_chart",
    "build_chart",
    "chart_html",
    "decode_chart_spec",
    "doughnut_chart",
    "encode_chart_spec",
    "flatten_pairs",
    "line_chart",
    "load_style_preset",
    "make_fill",
    "normalize_color",
    "normalize_color_spec",
    "pie_chart",
    "polar_area_chart",
    "radar_chart",
    "save_chart_html",
    "serialize_chart",
    "serve_chart",
    "with_options",
]
