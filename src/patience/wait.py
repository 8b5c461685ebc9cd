r"""High level facade for waiting on a condition.

``PatientWait`` bundles an initial delay, a default timeout, a delay
factory and an execution handler. It creates ``WaitFuture`` objects that
repeatedly call a function until it returns a valid value.

Example:
    ```pycon
    >>> from patience import PatientWait, WaitConfig
    >>> from patience.delays import fixed
    >>> values = iter([None, False, "ready"])
    >>> wait = PatientWait(WaitConfig(default_timeout=1, delay_factory=fixed(0)))
    >>> wait.from_callable(lambda: next(values)).get()
    'ready'
    >>> wait.from_callable(lambda: None).check(timeout=0)
    False

    ```
"""

from __future__ import annotations

__all__ = ["PatientWait", "WaitFuture"]

from typing import TYPE_CHECKING, TypeVar

from patience.config import DEFAULT_FAILURE_MESSAGE, WaitConfig
from patience.exceptions import PatienceTimeoutError
from patience.execution import is_truthy_result
from patience.future import BaseFuture
from patience.utils.sleep import sleep_for
from patience.utils.validation import validate_duration

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

T = TypeVar("T")


class WaitFuture(BaseFuture[T]):
    """A pending wait for a valid value from a function.

    Args:
        config: The wait configuration.
        func: Zero-argument callable producing candidate values.
        result_filter: Predicate deciding whether a value is valid.
        message: Message, or callable producing the message, of the
            timeout error.
    """

    error_class = PatienceTimeoutError

    def __init__(
        self,
        config: WaitConfig,
        func: Callable[[], T],
        result_filter: Callable[[T], bool] = is_truthy_result,
        message: str | Callable[[], str] = DEFAULT_FAILURE_MESSAGE,
    ) -> None:
        super().__init__(config, func, result_filter, message)

    def get(self, timeout: timedelta | float | None = None) -> T:
        """Wait for a valid value.

        Args:
            timeout: Max duration to keep trying. Defaults to the
                configured ``default_timeout``.

        Returns:
            The first value accepted by the filter.

        Raises:
            PatienceTimeoutError: If no valid value was found in time.
            PatienceError: If an attempt raised an exception that the
                execution handler does not ignore.
        """
        timeout = self._config.default_timeout if timeout is None else timeout
        timeout = validate_duration(timeout, "timeout")

        sleep_for(self._config.initial_delay)
        return self._unwrap(self._executor.execute(self._attempt, timeout))

    def check(self, timeout: timedelta | float | None = None) -> bool:
        """Return whether a valid value was found in time.

        Only the timeout is turned into ``False``; other errors propagate.

        Args:
            timeout: Max duration to keep trying. Defaults to the
                configured ``default_timeout``.
        """
        return super().check(timeout)


class PatientWait:
    """Factory of wait futures sharing one configuration.

    Args:
        config: The wait configuration. Defaults to ``WaitConfig()``.
    """

    def __init__(self, config: WaitConfig | None = None) -> None:
        self.config = config if config is not None else WaitConfig()

    def from_callable(self, func: Callable[[], T]) -> WaitFuture[T]:
        """Create a future for ``func`` accepting any value but ``None``
        and ``False``."""
        return WaitFuture(self.config, func)

    def with_filter(
        self, result_filter: Callable[[T], bool]
    ) -> Callable[[Callable[[], T]], WaitFuture[T]]:
        """Return a function creating futures that use ``result_filter``.

        Example:
            ```pycon
            >>> from patience import PatientWait
            >>> positive = PatientWait().with_filter(lambda value: value > 0)
            >>> positive(lambda: 3).check()
            True

            ```
        """

        def from_callable(func: Callable[[], T]) -> WaitFuture[T]:
            return WaitFuture(self.config, func, result_filter)

        return from_callable
