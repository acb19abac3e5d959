"""Exception types raised while building chart configurations."""

from __future__ import annotations

from collections.abc import Iterable


class ChartError(ValueError):
    """Base class for chart construction failures."""


class InvalidArgument(ChartError):
    """Raised for malformed or missing builder inputs (data, labels, pairs, port)."""


class InvalidOptionType(ChartError):
    """Raised when an option value is not of the kind its option declares."""

    def __init__(self, *, option_name: str, expected: str, value: object) -> None:
        """Initialize the error.

        Args:
            option_name: Target property name of the option (e.g. ``borderWidth``).
            expected: Human-readable description of the expected kind.
            value: The rejected raw value.
        """

        super().__init__(f"Option {option_name!r} must be {expected}; got {value!r}.")
        self.option_name = option_name
        self.expected = expected
        self.value = value


class InvalidOptionValue(ChartError):
    """Raised when a string option is not one of its allowed values."""

    def __init__(self, *, option_name: str, allowed: Iterable[str], value: object) -> None:
        """Initialize the error.

        Args:
            option_name: Target property name of the option.
            allowed: Allowed values in their canonical spelling.
            value: The rejected raw value.
        """

        self.allowed = tuple(allowed)
        super().__init__(
            f"Option {option_name!r} must be one of {', '.join(repr(a) for a in self.allowed)}; got {value!r}."
        )
        self.option_name = option_name
        self.value = value


class InvalidColor(ChartError):
    """Raised when a color specification cannot be normalized."""

    def __init__(self, value: object, *, reason: str, option_name: str | None = None) -> None:
        """Initialize the error.

        Args:
            value: The rejected raw color specification.
            reason: Short description of why normalization failed.
            option_name: Option being validated, when raised from option dispatch.
        """

        prefix = f"Option {option_name!r}: " if option_name else ""
        super().__init__(f"{prefix}invalid color {value!r} ({reason}).")
        self.value = value
        self.reason = reason
        self.option_name = option_name
