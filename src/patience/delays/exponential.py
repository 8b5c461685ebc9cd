r"""Exponential delay sequence."""

from __future__ import annotations

__all__ = ["ExponentialDelaySequence", "ExponentialDelaySequenceFactory"]

from typing import TYPE_CHECKING

from patience.delays.base import DelaySequence, DelaySequenceFactory
from patience.utils.validation import validate_duration

if TYPE_CHECKING:
    from datetime import timedelta


class ExponentialDelaySequence(DelaySequence):
    """Delay sequence whose n-th term is ``initial_delay * base ** n``.

    The counter starts at zero, so the first delay is ``initial_delay``.
    Very long sequences eventually raise ``OverflowError`` once the delay
    no longer fits in a ``timedelta``.

    Args:
        base: The integer base of the power function.
        initial_delay: The first delay of the sequence.
    """

    def __init__(self, base: int, initial_delay: timedelta) -> None:
        self._base = base
        self._initial_delay = initial_delay
        self._count = 0

    def next_delay(self) -> timedelta:
        delay = self._initial_delay * (self._base**self._count)
        self._count += 1
        return delay


class ExponentialDelaySequenceFactory(DelaySequenceFactory):
    """Factory of exponentially growing delay sequences.

    Delays are calculated as ``initial_delay * base ** n`` where ``n`` is
    the number of delays already produced by the sequence. A base of one
    yields the same delays as a fixed sequence of ``initial_delay``.

    Args:
        base: The integer base of the power function. Must be >= 1.
        initial_delay: The first delay, as a ``timedelta`` or a number of
            seconds. Must be > 0.

    Raises:
        TypeError: If base is not an int or initial_delay is not a duration.
        ValueError: If base is < 1 or initial_delay is not positive.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from patience.delays import ExponentialDelaySequenceFactory
        >>> factory = ExponentialDelaySequenceFactory(2, timedelta(milliseconds=100))
        >>> sequence = factory.create()
        >>> [delay.total_seconds() for delay in (next(sequence) for _ in range(4))]
        [0.1, 0.2, 0.4, 0.8]

        ```
    """

    def __init__(self, base: int, initial_delay: timedelta | float) -> None:
        if isinstance(base, bool) or not isinstance(base, int):
            msg = f"base must be an int, got {base!r}"
            raise TypeError(msg)
        if base < 1:
            msg = f"base must be >= 1, got {base}"
            raise ValueError(msg)

        self._base = base
        self._initial_delay = validate_duration(
            initial_delay, "initial_delay", strictly_positive=True
        )

    @property
    def base(self) -> int:
        return self._base

    @property
    def initial_delay(self) -> timedelta:
        return self._initial_delay

    def create(self) -> ExponentialDelaySequence:
        return ExponentialDelaySequence(self._base, self._initial_delay)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base={self._base}, "
            f"initial_delay={self._initial_delay!r})"
        )
