r"""Callback types and data structures for observability.

This module lets users hook into the retry lifecycle for logging,
metrics or alerting. Four hooks are available:

- on_attempt: Called before each attempt
- on_retry: Called before sleeping ahead of another attempt
- on_success: Called when an attempt succeeds
- on_failure: Called when the run ends without success

Example:
    ```pycon
    >>> from patience.callbacks import RetryInfo
    >>> from patience.delays import fixed
    >>> from patience.results import Failure
    >>> from patience.retry import CallbackConfig, RetryExecutor
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"attempt {info.attempt} in {info.wait_time.total_seconds()}s")
    ...
    >>> executor = RetryExecutor(fixed(0), callbacks=CallbackConfig(on_retry=log_retry))
    >>> executor.execute(lambda: Failure("not yet"), 0)
    Fail(failure_descriptions=('not yet',))

    ```
"""

from __future__ import annotations

__all__ = ["AttemptInfo", "FailureInfo", "RetryInfo", "SuccessInfo"]

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The attempt about to be made (1-indexed).
    """

    attempt: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The attempt that will be made after the wait (1-indexed).
        wait_time: How long the executor waits before that attempt.
        failure_description: Why the previous attempt failed.
    """

    attempt: int
    wait_time: timedelta
    failure_description: str


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt that succeeded (1-indexed).
        value: The value produced by the attempt.
        total_time: Time spent on the run, sleeps included.
    """

    attempt: int
    value: Any
    total_time: timedelta


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempts: The number of attempts made.
        failure_descriptions: The description of every failed attempt.
        total_time: Time spent on the run, sleeps included.
    """

    attempts: int
    failure_descriptions: tuple[str, ...]
    total_time: timedelta
