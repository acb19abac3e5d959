"""Runtime settings for chartforge.

Defaults suit local use. Every value can be overridden through environment
variables so documents can point at a mirrored Chart.js build or a different
bind address without code changes.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")

_TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})


def _env(name: str, parse: Callable[[str], T], *, default: T) -> T:
    """Read and parse an environment variable.

    Unset and blank variables yield `default`; anything else is stripped and
    handed to `parse`, whose errors propagate.
    """

    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return parse(raw)


def _parse_bool(raw: str) -> bool:
    return raw.lower() in _TRUE_VALUES


CHARTJS_URL = _env("CHARTFORGE_CHARTJS_URL", str, default="https://cdn.jsdelivr.net/npm/chart.js")

SERVE_HOST = _env("CHARTFORGE_SERVE_HOST", str, default="127.0.0.1")
DEFAULT_PORT = _env("CHARTFORGE_DEFAULT_PORT", int, default=8080)

# Unknown option names raise InvalidArgument instead of being skipped.
STRICT_OPTIONS = _env("CHARTFORGE_STRICT_OPTIONS", _parse_bool, default=False)
