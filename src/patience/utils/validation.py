r"""Parameter validation utilities for retry configuration.

This module provides validation functions for durations and other
retry parameters to ensure they meet the required constraints before
being used by the retry loop.
"""

from __future__ import annotations

__all__ = ["to_timedelta", "validate_duration", "validate_num_retries"]

from datetime import timedelta


def to_timedelta(value: timedelta | float, name: str = "duration") -> timedelta:
    """Convert a duration argument to a ``timedelta``.

    Args:
        value: A ``timedelta`` or a number of seconds.
        name: The argument name, used in error messages.

    Returns:
        The duration as a ``timedelta``.

    Raises:
        TypeError: If value is ``None``, a ``bool`` or not a duration.

    Example:
        ```pycon
        >>> from patience.utils.validation import to_timedelta
        >>> to_timedelta(1.5)
        datetime.timedelta(seconds=1, microseconds=500000)
        >>> to_timedelta(timedelta(milliseconds=100))
        datetime.timedelta(microseconds=100000)

        ```
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{name} must be a timedelta or a number of seconds, got {value!r}"
        raise TypeError(msg)
    return timedelta(seconds=value)


def validate_duration(
    value: timedelta | float, name: str = "duration", *, strictly_positive: bool = False
) -> timedelta:
    """Validate a duration argument and return it as a ``timedelta``.

    Args:
        value: A ``timedelta`` or a number of seconds.
        name: The argument name, used in error messages.
        strictly_positive: If ``True``, zero is rejected too.

    Returns:
        The validated duration.

    Raises:
        TypeError: If value is not a duration.
        ValueError: If value is negative, or zero when
            ``strictly_positive`` is set.

    Example:
        ```pycon
        >>> from patience.utils.validation import validate_duration
        >>> validate_duration(0)
        datetime.timedelta(0)
        >>> validate_duration(0, "initial_delay", strictly_positive=True)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: initial_delay must be > 0, got 0:00:00

        ```
    """
    duration = to_timedelta(value, name)
    if strictly_positive and duration <= timedelta(0):
        msg = f"{name} must be > 0, got {duration}"
        raise ValueError(msg)
    if duration < timedelta(0):
        msg = f"{name} must be >= 0, got {duration}"
        raise ValueError(msg)
    return duration


def validate_num_retries(value: int, name: str = "num_retries") -> int:
    """Validate a number of retries.

    Args:
        value: The number of retries. A value of 0 means no retries
            (only the initial attempt).
        name: The argument name, used in error messages.

    Returns:
        The validated number of retries.

    Raises:
        TypeError: If value is not an ``int`` or is a ``bool``.
        ValueError: If value is negative.

    Example:
        ```pycon
        >>> from patience.utils.validation import validate_num_retries
        >>> validate_num_retries(3)
        3

        ```
    """
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an int, got {value!r}"
        raise TypeError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)
    return value
