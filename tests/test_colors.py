"""Tests for color normalization."""

from __future__ import annotations

import numpy as np
import pytest

from chartforge.colors import Color, normalize_color, normalize_color_spec
from chartforge.errors import InvalidColor

pytestmark = pytest.mark.unit


def test_named_colors_are_case_insensitive() -> None:
    """Normalize CSS names to lowercase named colors."""

    color = normalize_color("  DarkSlateGray ")
    assert color == Color(space="named", value="darkslategray")
    assert color.css() == "darkslategray"
    assert color.to_js() == "'darkslategray'"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("#ABC", "#aabbcc"),
        ("#abcd", "#aabbccdd"),
        ("#1A2B3C", "#1a2b3c"),
        ("#1a2b3c80", "#1a2b3c80"),
    ],
)
def test_hex_colors_expand_to_lowercase_long_form(raw: str, expected: str) -> None:
    """Canonicalize short and long hex forms."""

    assert normalize_color(raw) == Color(space="hex", value=expected)


def test_numeric_triples_use_the_0_to_255_scale() -> None:
    """Treat numeric components as 0-255 RGB with an optional 0-1 alpha."""

    assert normalize_color([255, 0, 0]).css() == "rgba(255, 0, 0, 1)"
    assert normalize_color((0, 128, 255, 0.5)).css() == "rgba(0, 128, 255, 0.5)"
    assert normalize_color(np.array([10.0, 20.0, 30.0])).value == (10, 20, 30, 1)
    # Unit-scale input is not rescaled.
    assert normalize_color([1, 0, 0]).css() == "rgba(1, 0, 0, 1)"


def test_rgb_function_strings_are_parsed() -> None:
    """Accept rgb()/rgba() strings and validate their components."""

    assert normalize_color("rgba(255, 0, 0, 0.25)").value == (255, 0, 0, 0.25)
    assert normalize_color("RGB(1,2,3)").value == (1, 2, 3, 1)
    with pytest.raises(InvalidColor):
        normalize_color("rgb(300, 0, 0)")


def test_existing_colors_pass_through_unchanged() -> None:
    """Return an already-normalized Color as-is."""

    color = Color(space="named", value="red")
    assert normalize_color(color) is color


@pytest.mark.parametrize(
    "raw",
    [
        "notacolor",
        "#12345",
        "#ggg",
        [256, 0, 0],
        [-1, 0, 0],
        [0, 0, 0, 1.5],
        [1, 2],
        [1, 2, 3, 4, 5],
        [float("nan"), 0, 0],
        ["1", "2", "3"],
        True,
        None,
        42,
    ],
)
def test_invalid_colors_are_rejected(raw: object) -> None:
    """Raise InvalidColor for unsupported shapes and out-of-range components."""

    with pytest.raises(InvalidColor):
        normalize_color(raw)


def test_color_spec_accepts_per_point_lists() -> None:
    """Return one Color for flat numeric input and a tuple for lists of colors."""

    assert normalize_color_spec([255, 0, 0]) == Color(space="rgba", value=(255, 0, 0, 1))
    assert normalize_color_spec(["red", "#00FF00"]) == (
        Color(space="named", value="red"),
        Color(space="hex", value="#00ff00"),
    )
    rows = normalize_color_spec(np.array([[255, 0, 0], [0, 0, 255]]))
    assert isinstance(rows, tuple)
    assert [c.css() for c in rows] == ["rgba(255, 0, 0, 1)", "rgba(0, 0, 255, 1)"]


def test_color_spec_rejects_empty_lists_and_bad_entries() -> None:
    """Reject empty lists and lists containing an invalid entry."""

    with pytest.raises(InvalidColor):
        normalize_color_spec([])
    with pytest.raises(InvalidColor):
        normalize_color_spec(["red", "not-a-color"])
