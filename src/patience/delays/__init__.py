r"""Delay sequences used to space out retry attempts.

This package provides the ``DelaySequenceFactory`` contract and its
fixed and exponential implementations, along with short constructor
functions.

Example:
    ```pycon
    >>> from patience.delays import exponential, fixed
    >>> fixed(0.5).create().next_delay().total_seconds()
    0.5
    >>> sequence = exponential(3, 1).create()
    >>> [next(sequence).total_seconds() for _ in range(3)]
    [1.0, 3.0, 9.0]

    ```
"""

from __future__ import annotations

__all__ = [
    "DelaySequence",
    "DelaySequenceFactory",
    "ExponentialDelaySequence",
    "ExponentialDelaySequenceFactory",
    "FixedDelaySequence",
    "FixedDelaySequenceFactory",
    "exponential",
    "fixed",
]

from typing import TYPE_CHECKING

from patience.delays.base import DelaySequence, DelaySequenceFactory
from patience.delays.exponential import ExponentialDelaySequence, ExponentialDelaySequenceFactory
from patience.delays.fixed import FixedDelaySequence, FixedDelaySequenceFactory

if TYPE_CHECKING:
    from datetime import timedelta


def fixed(duration: timedelta | float) -> FixedDelaySequenceFactory:
    """Create a factory of constant delays.

    Args:
        duration: The delay between attempts. Must be non-negative.

    Returns:
        The delay factory.
    """
    return FixedDelaySequenceFactory(duration)


def exponential(base: int, initial_delay: timedelta | float) -> ExponentialDelaySequenceFactory:
    """Create a factory of exponentially growing delays.

    Args:
        base: The integer base of the power function. Must be >= 1.
        initial_delay: The first delay. Must be > 0.

    Returns:
        The delay factory.
    """
    return ExponentialDelaySequenceFactory(base, initial_delay)
