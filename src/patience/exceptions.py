r"""Exception classes raised by the retry machinery.

Ordinary retryable failures are never raised: they are reported as
``Failure`` outcomes and collected in a ``Fail`` result. The exceptions
defined here signal defects in how the retry loop is used, or, for the
``PatientWait`` and ``PatientRetry`` facades, that no valid result was
found in time or within the allowed retries.
"""

from __future__ import annotations

__all__ = [
    "PatienceError",
    "PatienceRetryError",
    "PatienceTimeoutError",
    "RepeatedAttemptsError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class PatienceError(RuntimeError):
    """Raised when a retry run is aborted by a fatal defect.

    Examples of such defects are an attempt supplier that raises or
    returns ``None``, or a delay sequence that produces a negative
    delay. When the defect was caused by another exception, that
    exception is available as ``__cause__``.

    Args:
        message: Description of the defect.
        cause: Optional exception that caused the defect.

    Example:
        ```pycon
        >>> from patience.exceptions import PatienceError
        >>> error = PatienceError("received a None outcome")
        >>> str(error)
        'received a None outcome'

        ```
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.__cause__ = cause


class RepeatedAttemptsError(PatienceError):
    """Base class for errors that summarize several failed attempts.

    Args:
        message: Description of the error.
        failure_descriptions: Descriptions of every failed attempt, in
            attempt order. Must not be empty.

    Raises:
        ValueError: If failure_descriptions is empty.
    """

    def __init__(self, message: str, failure_descriptions: Iterable[str]) -> None:
        descriptions = tuple(failure_descriptions)
        if not descriptions:
            msg = "failure_descriptions must not be empty"
            raise ValueError(msg)
        super().__init__(message)
        self.failure_descriptions = descriptions

    @property
    def failed_attempts_count(self) -> int:
        """The number of failed attempts."""
        return len(self.failure_descriptions)


class PatienceTimeoutError(RepeatedAttemptsError):
    """Raised when no valid result was found within the timeout.

    Example:
        ```pycon
        >>> from patience.exceptions import PatienceTimeoutError
        >>> error = PatienceTimeoutError("no result", ["None", "False"])
        >>> error.failed_attempts_count
        2
        >>> error.failure_descriptions
        ('None', 'False')

        ```
    """


class PatienceRetryError(RepeatedAttemptsError):
    """Raised when no valid result was found within the allowed retries."""
