r"""Blocking sleep helper used between retry attempts."""

from __future__ import annotations

__all__ = ["sleep_for"]

import logging
import time
from typing import TYPE_CHECKING

from patience.utils.validation import validate_duration

if TYPE_CHECKING:
    from datetime import timedelta

logger: logging.Logger = logging.getLogger(__name__)


def sleep_for(duration: timedelta | float) -> None:
    """Block the calling thread for the given duration.

    A zero duration returns immediately without calling ``time.sleep``.

    Args:
        duration: How long to sleep. Must be non-negative.

    Raises:
        ValueError: If duration is negative.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from patience.utils.sleep import sleep_for
        >>> sleep_for(timedelta(0))
        >>> sleep_for(0.001)

        ```
    """
    duration = validate_duration(duration)
    seconds = duration.total_seconds()
    if seconds == 0:
        return
    logger.debug(f"Sleeping for {seconds:.3f}s")
    time.sleep(seconds)
