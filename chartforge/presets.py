"""Reusable style presets stored as YAML.

A preset is a mapping of option name to value:

    borderColor: "#3366cc"
    borderWidth: 2
    borderDash: [6, 3]
    fill:
      target: origin
      above: "rgba(51, 102, 204, 0.2)"

Presets are plain builder input; values are validated when the chart is built.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

import yaml

from .errors import InvalidArgument
from .schema import make_fill


def load_style_preset(path: str | os.PathLike[str]) -> tuple[tuple[str, object], ...]:
    """Load option name/value pairs from a YAML preset file.

    Args:
        path: Preset file path.

    Returns:
        Pairs in file order. A mapping under ``fill`` is converted to a Fill.

    Raises:
        OSError: When the file cannot be read.
        InvalidArgument: When the document is not a mapping of option names.
    """

    raw = Path(path).read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise InvalidArgument(f"Style preset {str(path)!r} is not valid YAML.") from exc
    return parse_style_preset(payload or {}, source=str(path))


def parse_style_preset(payload: object, *, source: str = "<preset>") -> tuple[tuple[str, object], ...]:
    """Convert a decoded preset document into option pairs.

    Raises:
        InvalidArgument: When `payload` is not a mapping with string keys.
    """

    if not isinstance(payload, Mapping):
        raise InvalidArgument(f"Style preset {source!r} must be a mapping of option names to values.")
    pairs: list[tuple[str, object]] = []
    for name, value in payload.items():
        if not isinstance(name, str):
            raise InvalidArgument(f"Style preset {source!r} has a non-string option name: {name!r}.")
        if name.casefold() == "fill" and isinstance(value, Mapping):
            if "target" not in value:
                raise InvalidArgument(f"Style preset {source!r}: fill requires a target.")
            value = make_fill(value["target"], above=value.get("above"), below=value.get("below"))
        pairs.append((name, value))
    return tuple(pairs)


def flatten_pairs(pairs: Iterable[tuple[str, object]]) -> list[object]:
    """Flatten pairs into the ``name, value, name, value`` form the builder takes."""

    return [item for pair in pairs for item in pair]
