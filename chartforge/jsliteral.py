"""Formatting helpers for Chart.js object literals.

Chart configurations are embedded verbatim in a ``<script>`` block, so values
are written as JavaScript literals (bare keys, single-quoted strings) rather
than JSON. Arrays and objects are always assembled by joining their parts, so
output is bracket-balanced for any number of entries.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from numbers import Real

import numpy as np

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# Integral floats below this print as plain integers.
_EXACT_INT_LIMIT = 2.0**53


def js_number(value: Real) -> str:
    """Format a number exactly, in its shortest round-tripping form.

    Integral values print without a fraction. NaN becomes ``null`` (a gap for
    Chart.js) and infinities become ``Infinity`` / ``-Infinity``.
    """

    if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
        return str(int(value))
    number = float(value)
    if math.isnan(number):
        return "null"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < _EXACT_INT_LIMIT:
        return str(int(number))
    return repr(number)


def js_general_number(value: Real) -> str:
    """Format a number with C ``%g`` conventions (used for axis labels)."""

    number = float(value)
    if math.isnan(number) or math.isinf(number):
        return js_number(number)
    return format(number, "g")


def js_string(value: str) -> str:
    """Return a single-quoted JavaScript string literal."""

    escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in value)
    # Keep a literal "</script>" from closing the embedding script block.
    escaped = escaped.replace("</", "<\\/")
    return f"'{escaped}'"


def js_key(name: str) -> str:
    """Return an object key, bare when it is a valid identifier."""

    return name if name.isidentifier() else js_string(name)


def js_array(items: Iterable[object]) -> str:
    """Return an array literal such as ``[1, 2, 3]``."""

    return "[" + ", ".join(js_literal(item) for item in items) + "]"


def js_object(members: Mapping[str, object]) -> str:
    """Return an object literal such as ``{ a: 1, b: 'x' }`` (``{}`` when empty)."""

    if not members:
        return "{}"
    body = ", ".join(f"{js_key(key)}: {js_literal(value)}" for key, value in members.items())
    return "{ " + body + " }"


def js_literal(value: object) -> str:
    """Format an arbitrary supported value as a JavaScript literal.

    Objects exposing ``to_js()`` (colors, fill settings) format themselves.

    Raises:
        TypeError: When the value has no literal representation.
    """

    if value is None:
        return "null"
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (Real, np.integer, np.floating)):
        return js_number(value)
    if isinstance(value, str):
        return js_string(value)
    to_js = getattr(value, "to_js", None)
    if callable(to_js):
        return str(to_js())
    if isinstance(value, Mapping):
        return js_object(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        return js_array(value)
    raise TypeError(f"Cannot format {type(value).__name__} as a JavaScript literal.")
