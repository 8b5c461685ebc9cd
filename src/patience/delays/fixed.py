r"""Fixed delay sequence."""

from __future__ import annotations

__all__ = ["FixedDelaySequence", "FixedDelaySequenceFactory"]

from typing import TYPE_CHECKING

from patience.delays.base import DelaySequence, DelaySequenceFactory
from patience.utils.validation import validate_duration

if TYPE_CHECKING:
    from datetime import timedelta


class FixedDelaySequence(DelaySequence):
    """Delay sequence that always returns the same duration.

    Args:
        duration: The duration returned by every call.
    """

    def __init__(self, duration: timedelta) -> None:
        self._duration = duration

    def next_delay(self) -> timedelta:
        return self._duration


class FixedDelaySequenceFactory(DelaySequenceFactory):
    """Factory of constant delay sequences.

    Args:
        duration: The delay between attempts, as a ``timedelta`` or a
            number of seconds. Must be non-negative. Zero means the next
            attempt starts right away.

    Raises:
        TypeError: If duration is ``None`` or not a duration.
        ValueError: If duration is negative.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from patience.delays import FixedDelaySequenceFactory
        >>> sequence = FixedDelaySequenceFactory(timedelta(milliseconds=250)).create()
        >>> sequence.next_delay()
        datetime.timedelta(microseconds=250000)
        >>> sequence.next_delay()
        datetime.timedelta(microseconds=250000)

        ```
    """

    def __init__(self, duration: timedelta | float) -> None:
        self._duration = validate_duration(duration, "duration")

    @property
    def duration(self) -> timedelta:
        return self._duration

    def create(self) -> FixedDelaySequence:
        return FixedDelaySequence(self._duration)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(duration={self._duration!r})"
