r"""Outcome and result types for retry runs.

Two tagged unions are defined here:

- ``AttemptOutcome``: what a single attempt produced, either
  ``Success(value)`` or ``Failure(description)``.
- ``RetryResult``: what a whole retry run produced, either
  ``Pass(value)`` or ``Fail(failure_descriptions)``.

Example:
    ```pycon
    >>> from patience.results import Fail, Failure, Pass, Success
    >>> Success(42).is_success
    True
    >>> Failure("not ready").description
    'not ready'
    >>> Pass("done").value
    'done'
    >>> Fail(["a", "b"]).failure_descriptions
    ('a', 'b')

    ```
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "Fail", "Failure", "Pass", "RetryResult", "Success"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, Union

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful attempt.

    Attributes:
        value: The value produced by the attempt.
    """

    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A failed attempt that may be retried.

    Attributes:
        description: Human readable description of why the attempt failed.

    Raises:
        TypeError: If description is not a string.
    """

    description: str

    def __post_init__(self) -> None:
        if not isinstance(self.description, str):
            msg = f"description must be a str, got {self.description!r}"
            raise TypeError(msg)

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class Pass(Generic[T]):
    """The result of a retry run that found a successful attempt.

    Attributes:
        value: The value of the successful attempt.
    """

    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True, init=False)
class Fail:
    """The result of a retry run that never succeeded.

    Attributes:
        failure_descriptions: The description of every attempt made, in
            attempt order.

    Raises:
        ValueError: If no failure description is given.
    """

    failure_descriptions: tuple[str, ...]

    def __init__(self, failure_descriptions: Iterable[str]) -> None:
        descriptions = tuple(failure_descriptions)
        if not descriptions:
            msg = "failure_descriptions must not be empty"
            raise ValueError(msg)
        object.__setattr__(self, "failure_descriptions", descriptions)

    @property
    def is_success(self) -> bool:
        return False


AttemptOutcome = Union[Success[T], Failure]
RetryResult = Union[Pass[T], Fail]
