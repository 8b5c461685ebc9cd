r"""Base class shared by the wait and retry futures."""

from __future__ import annotations

__all__ = ["BaseFuture"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from patience.results import Pass
from patience.retry.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from patience.exceptions import RepeatedAttemptsError
    from patience.results import RetryResult

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseFuture(ABC, Generic[T]):
    """A pending request for a valid value from a function.

    Futures are immutable: ``with_filter`` and ``with_message`` return new
    futures. Nothing is executed until ``get`` or ``check`` is called, and
    each call is a new independent retry run.

    Args:
        config: The facade configuration. It must provide
            ``initial_delay``, ``delay_factory``, ``execution_handler``
            and ``callbacks``.
        func: Zero-argument callable producing candidate values.
        result_filter: Predicate deciding whether a value is valid.
        message: Message, or callable producing the message, of the
            error raised when no valid value is found.

    Raises:
        TypeError: If func or result_filter is not callable, or message
            is ``None``.
    """

    error_class: ClassVar[type[RepeatedAttemptsError]]

    def __init__(
        self,
        config: Any,
        func: Callable[[], T],
        result_filter: Callable[[T], bool],
        message: str | Callable[[], str],
    ) -> None:
        if not callable(func):
            msg = f"func must be callable, got {func!r}"
            raise TypeError(msg)
        if not callable(result_filter):
            msg = f"result_filter must be callable, got {result_filter!r}"
            raise TypeError(msg)
        if message is None:
            msg = "message must not be None"
            raise TypeError(msg)
        self._config = config
        self._func = func
        self._filter = result_filter
        self._message = message
        self._executor = RetryExecutor(config.delay_factory, callbacks=config.callbacks)

    @property
    def config(self) -> Any:
        return self._config

    def with_filter(self, result_filter: Callable[[T], bool]) -> BaseFuture[T]:
        """Return a copy of this future using another filter."""
        return type(self)(self._config, self._func, result_filter, self._message)

    def with_message(self, message: str | Callable[[], str]) -> BaseFuture[T]:
        """Return a copy of this future raising another error message.

        Args:
            message: The message, or a zero-argument callable producing it
                lazily when the error is raised.
        """
        return type(self)(self._config, self._func, self._filter, message)

    @abstractmethod
    def get(self, limit: Any = None) -> T:
        """Return the first valid value, or raise ``error_class``."""

    def check(self, limit: Any = None) -> bool:
        """Return whether a valid value was found.

        Only ``error_class`` is turned into ``False``; other errors
        propagate.
        """
        try:
            self.get(limit)
        except self.error_class:
            return False
        return True

    def _attempt(self) -> Any:
        return self._config.execution_handler.execute(self._func, self._filter)

    def _unwrap(self, result: RetryResult[T]) -> T:
        if isinstance(result, Pass):
            return result.value

        message = self._message() if callable(self._message) else self._message
        logger.debug(f"{message} ({len(result.failure_descriptions)} attempts)")
        raise self.error_class(message, result.failure_descriptions)
