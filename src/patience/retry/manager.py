r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING, Any

from patience.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from patience.retry.config import CallbackConfig

if TYPE_CHECKING:
    from datetime import timedelta


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attempt numbers are 0-indexed inside the executor and converted to
    1-indexed values before being handed to callbacks.

    Args:
        callbacks: Callback configuration. Defaults to no callbacks.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks if callbacks is not None else CallbackConfig()

    def on_attempt(self, attempt: int) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: The attempt about to be made (0-indexed).
        """
        if self.callbacks.on_attempt is not None:
            self.callbacks.on_attempt(AttemptInfo(attempt=attempt + 1))

    def on_retry(self, attempt: int, wait_time: timedelta, failure_description: str) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: The attempt that just failed (0-indexed). The callback
                receives the number of the next attempt.
            wait_time: The wait before the next attempt.
            failure_description: Why the attempt failed.
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    attempt=attempt + 2,
                    wait_time=wait_time,
                    failure_description=failure_description,
                )
            )

    def on_success(self, attempt: int, value: Any, total_time: timedelta) -> None:
        """Invoke on_success callback.

        Args:
            attempt: The attempt that succeeded (0-indexed).
            value: The value produced by the attempt.
            total_time: Time spent on the run.
        """
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(
                SuccessInfo(attempt=attempt + 1, value=value, total_time=total_time)
            )

    def on_failure(self, failure_descriptions: tuple[str, ...], total_time: timedelta) -> None:
        """Invoke on_failure callback.

        Args:
            failure_descriptions: The description of every failed attempt.
            total_time: Time spent on the run.
        """
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    attempts=len(failure_descriptions),
                    failure_descriptions=failure_descriptions,
                    total_time=total_time,
                )
            )
