from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


class FakeClock:
    """Manual clock whose ``sleep`` advances time instead of blocking.

    Attributes:
        now: The current time in seconds.
        sleeps: Every duration passed to ``sleep``, including zero.
    """

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[timedelta] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, duration: timedelta) -> None:
        self.sleeps.append(duration)
        self.now += duration.total_seconds()

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def non_zero_sleeps(self) -> list[timedelta]:
        return [duration for duration in self.sleeps if duration > timedelta(0)]


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a manual clock for deterministic timing tests."""
    return FakeClock()


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()
