r"""High level facade for retrying a function a given number of times.

``PatientRetry`` bundles an initial delay, a default number of retries,
a delay factory and an execution handler. It creates ``RetryFuture``
objects that call a function until it returns a valid value or the
retries are used up. Unlike ``PatientWait``, the run is bounded by a
count of attempts rather than by time.

Example:
    ```pycon
    >>> from patience import PatientRetry, RetryConfig
    >>> values = iter([None, False, "ready"])
    >>> retry = PatientRetry(RetryConfig(default_number_of_retries=2))
    >>> retry.from_callable(lambda: next(values)).get()
    'ready'
    >>> retry.from_callable(lambda: None).check(num_retries=0)
    False

    ```
"""

from __future__ import annotations

__all__ = ["PatientRetry", "RetryFuture"]

from typing import TYPE_CHECKING, TypeVar

from patience.config import DEFAULT_RETRY_FAILURE_MESSAGE, RetryConfig
from patience.exceptions import PatienceRetryError
from patience.execution import is_truthy_result
from patience.future import BaseFuture
from patience.utils.sleep import sleep_for
from patience.utils.validation import validate_num_retries

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class RetryFuture(BaseFuture[T]):
    """A pending retry of a function until it returns a valid value.

    Args:
        config: The retry configuration.
        func: Zero-argument callable producing candidate values.
        result_filter: Predicate deciding whether a value is valid.
        message: Message, or callable producing the message, of the
            error raised when the retries are used up.
    """

    error_class = PatienceRetryError

    def __init__(
        self,
        config: RetryConfig,
        func: Callable[[], T],
        result_filter: Callable[[T], bool] = is_truthy_result,
        message: str | Callable[[], str] = DEFAULT_RETRY_FAILURE_MESSAGE,
    ) -> None:
        super().__init__(config, func, result_filter, message)

    def get(self, num_retries: int | None = None) -> T:
        """Retry until a valid value is found.

        The first attempt is not a retry: ``get(0)`` makes one attempt
        and ``get(2)`` makes up to three.

        Args:
            num_retries: Number of retries after the first attempt.
                Defaults to the configured ``default_number_of_retries``.

        Returns:
            The first value accepted by the filter.

        Raises:
            PatienceRetryError: If no valid value was found.
            PatienceError: If an attempt raised an exception that the
                execution handler does not ignore.
        """
        if num_retries is None:
            num_retries = self._config.default_number_of_retries
        num_retries = validate_num_retries(num_retries, "num_retries")

        sleep_for(self._config.initial_delay)
        return self._unwrap(self._executor.execute_retries(self._attempt, num_retries))

    def check(self, num_retries: int | None = None) -> bool:
        """Return whether a valid value was found within the retries.

        Only the retry error is turned into ``False``; other errors
        propagate.

        Args:
            num_retries: Number of retries after the first attempt.
                Defaults to the configured ``default_number_of_retries``.
        """
        return super().check(num_retries)


class PatientRetry:
    """Factory of retry futures sharing one configuration.

    Args:
        config: The retry configuration. Defaults to ``RetryConfig()``.
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self.config = config if config is not None else RetryConfig()

    def from_callable(self, func: Callable[[], T]) -> RetryFuture[T]:
        """Create a future for ``func`` accepting any value but ``None``
        and ``False``."""
        return RetryFuture(self.config, func)

    def with_filter(
        self, result_filter: Callable[[T], bool]
    ) -> Callable[[Callable[[], T]], RetryFuture[T]]:
        """Return a function creating futures that use ``result_filter``."""

        def from_callable(func: Callable[[], T]) -> RetryFuture[T]:
            return RetryFuture(self.config, func, result_filter)

        return from_callable
