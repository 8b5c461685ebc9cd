r"""Execution handlers turning plain callables into attempt outcomes.

An execution handler calls a function, tests the returned value with a
filter, and reports the result as a ``Success`` or ``Failure``. Handlers
differ in how they treat exceptions raised by the function:

- ``SimpleExecutionHandler`` lets every exception propagate.
- ``IgnoringExecutionHandler`` turns the listed exception types into
  retryable failures.
- ``IgnoringAllExecutionHandler`` turns every exception into a
  retryable failure.

Example:
    ```pycon
    >>> from patience.execution import IgnoringExecutionHandler, is_truthy_result
    >>> handler = IgnoringExecutionHandler(KeyError)
    >>> handler.execute(lambda: {}["missing"], is_truthy_result)
    Failure(description="Ignored exception -> KeyError('missing')")
    >>> handler.execute(lambda: "ok", is_truthy_result)
    Success(value='ok')

    ```
"""

from __future__ import annotations

__all__ = [
    "ExecutionHandler",
    "IgnoringAllExecutionHandler",
    "IgnoringExecutionHandler",
    "SimpleExecutionHandler",
    "is_truthy_result",
]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from patience.results import Failure, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from patience.results import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_truthy_result(value: Any) -> bool:
    """Default filter: accept any value except ``None`` and ``False``.

    Args:
        value: The value returned by the function.

    Returns:
        ``True`` if the value counts as a valid result.

    Example:
        ```pycon
        >>> from patience.execution import is_truthy_result
        >>> is_truthy_result(0)
        True
        >>> is_truthy_result(None)
        False
        >>> is_truthy_result(False)
        False

        ```
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def _check_arguments(func: Callable[[], Any], result_filter: Callable[[Any], bool]) -> None:
    if not callable(func):
        msg = f"func must be callable, got {func!r}"
        raise TypeError(msg)
    if not callable(result_filter):
        msg = f"result_filter must be callable, got {result_filter!r}"
        raise TypeError(msg)


def _ignored(exc: Exception) -> Failure:
    logger.debug(f"Ignoring exception raised during execution: {exc!r}")
    return Failure(f"Ignored exception -> {exc!r}")


class ExecutionHandler(ABC):
    """Base class for execution handlers."""

    @abstractmethod
    def execute(
        self, func: Callable[[], T], result_filter: Callable[[T], bool]
    ) -> AttemptOutcome[T]:
        """Call ``func`` once and report the outcome.

        Args:
            func: Zero-argument callable producing a value.
            result_filter: Predicate deciding whether the value is valid.

        Returns:
            ``Success`` with the value if it passes the filter, otherwise
            ``Failure`` describing the rejected value.

        Raises:
            TypeError: If func or result_filter is not callable.
        """

    @staticmethod
    def _execute(func: Callable[[], T], result_filter: Callable[[T], bool]) -> AttemptOutcome[T]:
        value = func()
        if result_filter(value):
            return Success(value)
        return Failure(repr(value))


class SimpleExecutionHandler(ExecutionHandler):
    """Execution handler that lets every exception propagate."""

    def execute(
        self, func: Callable[[], T], result_filter: Callable[[T], bool]
    ) -> AttemptOutcome[T]:
        _check_arguments(func, result_filter)
        return self._execute(func, result_filter)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"


class IgnoringExecutionHandler(ExecutionHandler):
    """Execution handler that treats some exception types as failures.

    Exceptions that are instances of one of the given types become
    ``Failure`` outcomes and are retried. Any other exception propagates.

    Args:
        *exception_types: The exception types to ignore. At least one is
            required.

    Raises:
        ValueError: If no exception type is given.
        TypeError: If an argument is not an exception type.
    """

    def __init__(self, *exception_types: type[Exception]) -> None:
        if not exception_types:
            msg = "at least one exception type is required"
            raise ValueError(msg)
        for exception_type in exception_types:
            if not (isinstance(exception_type, type) and issubclass(exception_type, Exception)):
                msg = f"expected an exception type, got {exception_type!r}"
                raise TypeError(msg)
        self.exception_types = tuple(exception_types)

    def execute(
        self, func: Callable[[], T], result_filter: Callable[[T], bool]
    ) -> AttemptOutcome[T]:
        _check_arguments(func, result_filter)
        try:
            return self._execute(func, result_filter)
        except self.exception_types as exc:
            return _ignored(exc)

    def __repr__(self) -> str:
        names = ", ".join(exception_type.__name__ for exception_type in self.exception_types)
        return f"{self.__class__.__qualname__}({names})"


class IgnoringAllExecutionHandler(ExecutionHandler):
    """Execution handler that treats every exception as a failure."""

    def execute(
        self, func: Callable[[], T], result_filter: Callable[[T], bool]
    ) -> AttemptOutcome[T]:
        _check_arguments(func, result_filter)
        try:
            return self._execute(func, result_filter)
        except Exception as exc:  # noqa: BLE001
            return _ignored(exc)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
