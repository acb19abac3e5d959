"""Pytest fixtures shared across chartforge tests."""

from __future__ import annotations

import socket
from collections.abc import Sequence

import pytest

from chartforge import settings


@pytest.fixture
def free_port() -> int:
    """Return a TCP port that was free on the loopback interface a moment ago."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def strict_options(monkeypatch: pytest.MonkeyPatch) -> None:
    """Turn on strict option-name checking for the duration of a test."""

    monkeypatch.setattr(settings, "STRICT_OPTIONS", True)


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no filesystem or network access.
    - `integration`: tests that write files or open sockets.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
