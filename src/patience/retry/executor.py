r"""Synchronous retry executor.

This module implements the attempt/sleep/timeout loop. The executor is
configured once with a delay factory and can then run any number of
independent retry runs, possibly from several threads at once.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from datetime import timedelta
from typing import TYPE_CHECKING, TypeVar

from patience.exceptions import PatienceError
from patience.results import Fail, Failure, Pass, Success
from patience.retry.manager import CallbackManager
from patience.utils.sleep import sleep_for
from patience.utils.validation import validate_duration, validate_num_retries

if TYPE_CHECKING:
    from collections.abc import Callable

    from patience.delays.base import DelaySequence, DelaySequenceFactory
    from patience.results import AttemptOutcome, RetryResult
    from patience.retry.config import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryExecutor:
    """Executes an attempt supplier until it succeeds or time runs out.

    Before each attempt except the first, the executor sleeps for the
    next delay of a delay sequence created fresh for the run. A further
    attempt is only scheduled if waking up from that sleep would still
    be strictly before the deadline, so the executor never sleeps past
    the deadline just to make one more attempt. An attempt that is
    already running is never interrupted.

    Args:
        delay_factory: Factory of the delay sequences used between attempts.
        sleep: Function used to wait between attempts.
        clock: Monotonic clock returning seconds, used for the deadline.
        callbacks: Optional lifecycle callbacks.

    Raises:
        ValueError: If delay_factory is ``None``.

    Example:
        ```pycon
        >>> from patience.delays import fixed
        >>> from patience.results import Failure, Success
        >>> from patience.retry import RetryExecutor
        >>> executor = RetryExecutor(fixed(0))
        >>> executor.execute(lambda: Success(42), max_duration=0)
        Pass(value=42)
        >>> executor.execute(lambda: Failure("not ready"), max_duration=0)
        Fail(failure_descriptions=('not ready',))

        ```
    """

    def __init__(
        self,
        delay_factory: DelaySequenceFactory,
        *,
        sleep: Callable[[timedelta], None] = sleep_for,
        clock: Callable[[], float] = time.monotonic,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        if delay_factory is None:
            msg = "delay_factory must not be None"
            raise ValueError(msg)
        self.delay_factory = delay_factory
        self.sleep = sleep
        self.clock = clock
        self.callbacks = CallbackManager(callbacks)

    def execute(
        self,
        attempt_supplier: Callable[[], AttemptOutcome[T]],
        max_duration: timedelta | float,
    ) -> RetryResult[T]:
        """Run the retry loop.

        At least one attempt is always made, even with a zero
        ``max_duration``.

        Args:
            attempt_supplier: Zero-argument callable making one attempt
                and returning a ``Success`` or ``Failure``.
            max_duration: Maximum time to keep trying. Must be non-negative.

        Returns:
            ``Pass`` with the value of the first successful attempt, or
            ``Fail`` with the description of every attempt made.

        Raises:
            TypeError: If attempt_supplier is not callable or
                max_duration is not a duration.
            ValueError: If max_duration is negative.
            PatienceError: If the delay factory, the delay sequence or the
                attempt supplier breaks its contract, including when the
                attempt supplier raises.
        """
        _check_supplier(attempt_supplier)
        max_duration = validate_duration(max_duration, "max_duration")

        sequence = self._create_sequence()
        deadline = self.clock() + max_duration.total_seconds()

        def can_retry(attempt: int, next_delay: timedelta) -> bool:
            if self.clock() + next_delay.total_seconds() < deadline:
                return True
            logger.debug(
                f"Giving up after {attempt + 1} attempts: waiting "
                f"{next_delay.total_seconds():.3f}s would exceed the max duration "
                f"({max_duration.total_seconds():.3f}s)"
            )
            return False

        return self._run(attempt_supplier, sequence, can_retry)

    def execute_retries(
        self,
        attempt_supplier: Callable[[], AttemptOutcome[T]],
        num_retries: int,
    ) -> RetryResult[T]:
        """Run the retry loop for a fixed number of retries.

        The first attempt is not a retry, so at most ``num_retries + 1``
        attempts are made. Time is not limited.

        Args:
            attempt_supplier: Zero-argument callable making one attempt
                and returning a ``Success`` or ``Failure``.
            num_retries: Number of retries after the first attempt.
                Must be non-negative.

        Returns:
            ``Pass`` with the value of the first successful attempt, or
            ``Fail`` with the description of every attempt made.

        Raises:
            TypeError: If attempt_supplier is not callable or
                num_retries is not an int.
            ValueError: If num_retries is negative.
            PatienceError: If the delay factory, the delay sequence or the
                attempt supplier breaks its contract.

        Example:
            ```pycon
            >>> from patience.delays import fixed
            >>> from patience.results import Failure
            >>> from patience.retry import RetryExecutor
            >>> executor = RetryExecutor(fixed(0))
            >>> executor.execute_retries(lambda: Failure("not ready"), num_retries=2)
            Fail(failure_descriptions=('not ready', 'not ready', 'not ready'))

            ```
        """
        _check_supplier(attempt_supplier)
        num_retries = validate_num_retries(num_retries, "num_retries")

        sequence = self._create_sequence()

        def can_retry(attempt: int, next_delay: timedelta) -> bool:  # noqa: ARG001
            if attempt < num_retries:
                return True
            logger.debug(f"Giving up after {attempt + 1} attempts: no retries left")
            return False

        return self._run(attempt_supplier, sequence, can_retry)

    def _run(
        self,
        attempt_supplier: Callable[[], AttemptOutcome[T]],
        sequence: DelaySequence,
        can_retry: Callable[[int, timedelta], bool],
    ) -> RetryResult[T]:
        start_time = self.clock()
        failure_descriptions: list[str] = []
        next_delay = timedelta(0)
        attempt = 0

        while True:
            self.sleep(next_delay)
            self.callbacks.on_attempt(attempt)
            outcome = self._attempt(attempt_supplier)

            if isinstance(outcome, Success):
                logger.debug(f"Attempt {attempt + 1} succeeded")
                self.callbacks.on_success(attempt, outcome.value, self._elapsed(start_time))
                return Pass(outcome.value)

            failure_descriptions.append(outcome.description)
            logger.debug(f"Attempt {attempt + 1} failed: {outcome.description}")

            next_delay = self._next_delay(sequence)
            if not can_retry(attempt, next_delay):
                break

            self.callbacks.on_retry(attempt, next_delay, outcome.description)
            attempt += 1

        descriptions = tuple(failure_descriptions)
        self.callbacks.on_failure(descriptions, self._elapsed(start_time))
        return Fail(descriptions)

    def _create_sequence(self) -> DelaySequence:
        sequence = self.delay_factory.create()
        if sequence is None:
            msg = f"Received a None delay sequence from {self.delay_factory!r}"
            raise PatienceError(msg)
        return sequence

    @staticmethod
    def _attempt(attempt_supplier: Callable[[], AttemptOutcome[T]]) -> AttemptOutcome[T]:
        try:
            outcome = attempt_supplier()
        except PatienceError:
            raise
        except Exception as exc:
            msg = f"Unexpected exception raised while getting an attempt outcome: {exc!r}"
            raise PatienceError(msg, cause=exc) from exc

        if not isinstance(outcome, (Success, Failure)):
            msg = f"Expected a Success or Failure from the attempt supplier, got {outcome!r}"
            raise PatienceError(msg)
        return outcome

    @staticmethod
    def _next_delay(sequence: DelaySequence) -> timedelta:
        delay = sequence.next_delay()
        if not isinstance(delay, timedelta) or delay < timedelta(0):
            msg = f"Received an invalid delay from the delay sequence: {delay!r}"
            raise PatienceError(msg)
        return delay

    def _elapsed(self, start_time: float) -> timedelta:
        return timedelta(seconds=self.clock() - start_time)


def _check_supplier(attempt_supplier: object) -> None:
    if not callable(attempt_supplier):
        msg = f"attempt_supplier must be callable, got {attempt_supplier!r}"
        raise TypeError(msg)
